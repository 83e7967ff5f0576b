"""
Per-feature Z-score style normalization.

Each feature column is centered on its population mean and divided by a
per-column spread so that features measured on different scales contribute
comparably to Euclidean distances.
"""

from typing import Optional
import warnings
import torch
from torch import Tensor

from ..base.interfaces import Normalizer
from ..exceptions import InvalidConfiguration

SPREAD_METHODS = ('variance', 'std')


class ZScoreNormalizer(Normalizer):
    """Column-wise centering and scaling.

    Parameters
    ----------
    spread : {'variance', 'std'}, default='variance'
        Divisor applied after centering:
        - 'variance' : population variance (1/N) * sum (x - mean)^2.
          This is not a true Z-score; it is the scaling the clustering
          geometry of this package is defined on.
        - 'std' : population standard deviation, a true Z-score.

    Columns holding a single repeated value are centered on that value and
    divided by 1 instead, so a constant feature becomes an all-zero column.
    A UserWarning lists them.

    Attributes
    ----------
    mean_ : Tensor of shape (n_features,)
    spread_ : Tensor of shape (n_features,)
        Divisor actually used, after the constant-column guard.
    constant_features_ : Tensor of shape (n_features,), bool
    """

    def __init__(self, spread: str = 'variance'):
        if spread not in SPREAD_METHODS:
            raise InvalidConfiguration(f"spread must be one of {SPREAD_METHODS}, got '{spread}'")
        self.spread = spread
        self.mean_: Optional[Tensor] = None
        self.spread_: Optional[Tensor] = None
        self.constant_features_: Optional[Tensor] = None

    def fit(self, points: Tensor) -> 'ZScoreNormalizer':
        """Compute per-column mean and spread over all N rows."""
        if points.dim() != 2:
            raise ValueError(f"Expected 2D tensor, got {points.dim()}D")

        mean = points.mean(dim=0)
        centered = points - mean.unsqueeze(0)
        variance = (centered * centered).mean(dim=0)

        if self.spread == 'variance':
            spread = variance
        else:
            spread = torch.sqrt(variance)

        # Rounding in the mean can leave a tiny nonzero variance on a constant
        # column, so constancy is read from the values themselves
        constant = (points == points[0:1]).all(dim=0)
        if constant.any():
            columns = torch.where(constant)[0].tolist()
            warnings.warn(f"Constant feature columns {columns} have zero spread; "
                          f"they are mapped to 0")
        mean = torch.where(constant, points[0], mean)
        spread = torch.where(constant, torch.ones_like(spread), spread)

        self.mean_ = mean
        self.spread_ = spread
        self.constant_features_ = constant
        return self

    def transform(self, points: Tensor) -> Tensor:
        """Rescale points with the fitted statistics. Returns a new tensor."""
        if self.mean_ is None:
            raise RuntimeError("Normalizer must be fitted before calling transform")
        if points.dim() != 2 or points.shape[1] != self.mean_.shape[0]:
            raise ValueError(f"Expected (n, {self.mean_.shape[0]}) tensor, "
                             f"got {tuple(points.shape)}")

        mean = self.mean_.to(points.device, points.dtype)
        spread = self.spread_.to(points.device, points.dtype)
        return (points - mean.unsqueeze(0)) / spread.unsqueeze(0)

    def __repr__(self) -> str:
        return f"ZScoreNormalizer(spread='{self.spread}')"


def zscore_normalize(points: Tensor, spread: str = 'variance') -> Tensor:
    """Normalize points column-wise in one call."""
    return ZScoreNormalizer(spread=spread).fit_transform(points)
