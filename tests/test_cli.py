import json

import pytest

from zkmeans.cli import main, build_parser, render_array, render_clusters, RULE


@pytest.fixture
def data_file(tmp_path, scenario_a):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"instances": scenario_a, "clusters": 2}))
    return path


def test_render_array():
    assert render_array([0, 1, 1]) == "[ 0, 1, 1 ]"


def test_render_clusters_groups_rows():
    out = render_clusters([[1.0, 2.0], [3.0, -4.0], [5.0, 6.0]], [1, 0, 1], 2).splitlines()

    assert out[0] == RULE
    assert out[1] == "Cluster #1".center(26, "-")
    assert out[2] == RULE
    assert "  1  3.0 -4.0" in out
    second = out.index("Cluster #2".center(26, "-"))
    assert out[second + 2:second + 4] == ["  0  1.0  2.0", "  2  5.0  6.0"]
    assert out[-1] == RULE


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.data == "data.json"
    assert args.clusters is None
    assert args.spread == "variance"
    assert not args.json
    assert args.verbose == 0


def test_main_json_output(data_file, capsys):
    assert main([str(data_file), "--json", "--seed", "0"]) == 0
    labels = json.loads(capsys.readouterr().out)
    assert len(labels) == 4
    assert sorted(set(labels)) == [0, 1]


def test_main_report(data_file, capsys):
    assert main([str(data_file), "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Clustered 4 instances into 2 clusters")
    assert "Cluster #1".center(26, "-") in out
    assert "Cluster #2".center(26, "-") in out
    assert "  0  1.0  1.0" in out
    assert "  3  9.1  9.0" in out


def test_main_cluster_override(data_file, capsys):
    assert main([str(data_file), "-k", "4", "--json"]) == 0
    assert sorted(json.loads(capsys.readouterr().out)) == [0, 1, 2, 3]


def test_main_too_many_clusters(data_file, capsys):
    assert main([str(data_file), "-k", "5"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("zkmeans: error:")


def test_main_value_too_large(tmp_path, capsys):
    path = tmp_path / "data.json"
    path.write_text('{"instances": [[1], [%s]], "clusters": 2}' % ("9" * 400))
    assert main([str(path)]) == 1
    assert "too large" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "absent.json")]) == 1
    assert "Could not read" in capsys.readouterr().err
