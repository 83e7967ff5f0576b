"""
Command line front end.

Loads a JSON request file, clusters it, and prints the assignment followed
by the instances grouped per cluster.
"""

from typing import List, Optional, Sequence
import argparse
import sys

from .algorithms.kmeans import KMeans
from .base.data_structures import TerminationReason
from .exceptions import ZKMeansError
from .io.json_codec import load_dataset, encode_clustering, DEFAULT_DATA_PATH
from .normalization.zscore import SPREAD_METHODS

RULE = "=" * 26


def render_array(labels: Sequence[int]) -> str:
    """Render the assignment as ``[ 0, 1, 1 ]``."""
    return "[ " + ", ".join(str(v) for v in labels) + " ]"


def render_clusters(instances: Sequence[Sequence[float]], labels: Sequence[int],
                    n_clusters: int) -> str:
    """Render instances grouped by cluster, one block per cluster id."""
    lines: List[str] = []
    for k in range(n_clusters):
        lines.append(RULE)
        lines.append(f"Cluster #{k + 1}".center(len(RULE), "-"))
        lines.append(RULE)
        for i, (row, label) in enumerate(zip(instances, labels)):
            if label != k:
                continue
            features = " ".join(f"{v: .1f}" for v in row)
            lines.append(f"{i:>3} {features}")
        lines.append(RULE)
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zkmeans",
        description="K-Means clustering of a JSON dataset over normalized features.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input file format:
  {"instances": [[1, 1], [1.1, 1], [9, 9], [9.1, 9]], "clusters": 2}

Examples:
  zkmeans data.json
  zkmeans data.json -k 3 --seed 7
  zkmeans data.json --json
        """,
    )
    parser.add_argument("data", nargs="?", default=DEFAULT_DATA_PATH,
                        help=f"Path to the JSON data file (default: {DEFAULT_DATA_PATH})")
    parser.add_argument("-k", "--clusters", type=int, default=None,
                        help="Number of clusters (default: the file's 'clusters' field)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for the initial partition")
    parser.add_argument("--spread", choices=SPREAD_METHODS, default="variance",
                        help="Normalization divisor per feature (default: variance)")
    parser.add_argument("--json", action="store_true",
                        help="Print only the JSON array of cluster ids")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Print fitting progress (repeat for per-iteration output)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        dataset = load_dataset(args.data, n_clusters=args.clusters)
        model = KMeans(
            n_clusters=dataset.n_clusters,
            spread=args.spread,
            verbose=args.verbose,
            random_state=args.seed,
        )
        labels = model.fit_predict(dataset.instances).tolist()
    except ZKMeansError as e:
        print(f"zkmeans: error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(encode_clustering(labels))
        return 0

    print(f"Clustered {dataset.n_points} instances into {dataset.n_clusters} clusters "
          f"({model.n_iter_} iterations, {model.termination_reason_.value}).")
    if model.termination_reason_ is not TerminationReason.CONVERGED:
        print("Note: stopped before reaching a stable assignment.")
    print("Result as an array - index is the instance number, value is its cluster.")
    print(render_array(labels))
    print()
    print("Instances divided by clusters:")
    print()
    print(render_clusters(dataset.to_lists(), labels, dataset.n_clusters))
    return 0


if __name__ == "__main__":
    sys.exit(main())
