"""
Headless point-picking surface.

Models a drawing canvas where each click adds a point to the training
sample. Pixel coordinates (origin top-left, y growing downwards) are mapped
to a square domain ``[0, domain_size]`` with the origin at the bottom-left,
so the regression works on small values regardless of canvas size. After
training, the fitted line is returned in pixel coordinates from domain
x = 0 to x = domain_size, ready to be drawn.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .regressor import LinearRegressor

DEFAULT_DOMAIN_SIZE = 10.0


@dataclass(frozen=True)
class CanvasMapping:
    """Conversion between canvas pixels and the regression domain."""
    width: float
    height: float
    domain_size: float = DEFAULT_DOMAIN_SIZE

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Canvas dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.domain_size <= 0:
            raise ValueError(f"domain_size must be positive, got {self.domain_size}")

    @property
    def factor_x(self) -> float:
        return self.width / self.domain_size

    @property
    def factor_y(self) -> float:
        return self.height / self.domain_size

    def to_domain(self, px: float, py: float) -> Tuple[float, float]:
        return px / self.factor_x, (self.height - py) / self.factor_y

    def to_canvas(self, x: float, y: float) -> Tuple[float, float]:
        return x * self.factor_x, self.height - y * self.factor_y


@dataclass(frozen=True)
class LineSegment:
    """Fitted line between two canvas points."""
    start: Tuple[float, float]
    end: Tuple[float, float]


class PointCanvas:
    """
    Collects clicked points and fits a line through them.

    Args:
        mapping (CanvasMapping): Pixel/domain conversion.
        regressor (LinearRegressor): Model to train; a default one is
            created when omitted.
    """

    def __init__(self, mapping: CanvasMapping,
                 regressor: Optional[LinearRegressor] = None) -> None:
        self.mapping = mapping
        self.regressor = regressor or LinearRegressor()
        self._sample: List[List] = []

    @property
    def points(self) -> List[Tuple[float, float]]:
        """Domain coordinates of the collected points."""
        return [(vector[1], label) for vector, label in self._sample]

    @property
    def sample(self) -> List[List]:
        return [[list(vector), label] for vector, label in self._sample]

    def click(self, px: float, py: float) -> Tuple[float, float]:
        """Add the point under pixel (px, py); returns its domain coordinates."""
        x, y = self.mapping.to_domain(px, py)
        self._sample.append([[1.0, x], y])
        return x, y

    def clear(self) -> None:
        self._sample = []
        self.regressor.clear()

    def fit_line(self, num_iterations: Optional[int] = None,
                 learning_rate: Optional[float] = None) -> Optional[LineSegment]:
        """
        Train on the collected points and return the line to draw.

        Returns None without training when no point has been added.
        """
        if not self._sample:
            return None

        self.regressor.train(self.sample, num_iterations, learning_rate)

        domain_size = self.mapping.domain_size
        y0, y1 = self.regressor.predict_many([[1.0, 0.0], [1.0, domain_size]])
        return LineSegment(
            start=self.mapping.to_canvas(0.0, y0),
            end=self.mapping.to_canvas(domain_size, y1),
        )
