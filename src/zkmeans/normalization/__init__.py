"""Feature normalization for clustering input."""

from .zscore import ZScoreNormalizer, zscore_normalize, SPREAD_METHODS

__all__ = [
    'ZScoreNormalizer',
    'zscore_normalize',
    'SPREAD_METHODS'
]
