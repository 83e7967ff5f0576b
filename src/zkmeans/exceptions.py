"""
Exception hierarchy for zkmeans.

Both concrete errors derive from ValueError so callers that already guard
estimator calls with ``except ValueError`` keep working.
"""


class ZKMeansError(Exception):
    """Base class for all errors raised by zkmeans."""


class InvalidConfiguration(ZKMeansError, ValueError):
    """Raised when the clustering configuration cannot be satisfied.

    Examples: fewer than two clusters, more clusters than instances, an
    unknown option value, or a fixed initial partition that leaves a
    cluster empty.
    """


class MalformedInput(ZKMeansError, ValueError):
    """Raised when the instances themselves are unusable.

    Examples: an empty dataset, ragged feature vectors, non-numeric or
    non-finite values, or a JSON document missing required fields.
    """
