"""
Drawing surface interfaces.

The radar client owns the screen, its projection and its graphics context.
The renderer only talks to these two small interfaces, so any host (or the
bundled SVG canvas) can be plugged in.
"""

from dataclasses import dataclass
from typing import Tuple

from .colors import RGB


@dataclass(frozen=True)
class PixelPoint:
    """A point in screen pixels (y grows downwards)."""
    x: float
    y: float

    def __add__(self, other: "PixelPoint") -> "PixelPoint":
        return PixelPoint(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "PixelPoint") -> "PixelPoint":
        return PixelPoint(self.x - other.x, self.y - other.y)

    def scaled(self, factor: float) -> "PixelPoint":
        return PixelPoint(self.x * factor, self.y * factor)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class PixelRect:
    """An axis-aligned screen rectangle."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, point: PixelPoint) -> bool:
        """Check if a point lies inside (left/top edges inclusive)."""
        return self.x <= point.x < self.right and self.y <= point.y < self.bottom

    def intersects(self, other: "PixelRect") -> bool:
        """Check for overlap with positive area; touching edges do not intersect."""
        return (self.x < other.right and self.y < other.bottom and
                self.right > other.x and self.bottom > other.y)


class Projection:
    """Geographic to screen projection supplied by the host."""

    def to_pixel(self, lat: float, lon: float) -> PixelPoint:
        raise NotImplementedError

    def viewport(self) -> PixelRect:
        """The visible radar area, used for clipping."""
        raise NotImplementedError


class Canvas:
    """Graphics context supplied by the host for one refresh.

    Colours are (r, g, b) tuples. Angles are in degrees, measured clockwise
    from the positive x axis as on a y-down screen.
    """

    def set_clip(self, rect: PixelRect):
        raise NotImplementedError

    def reset_clip(self):
        raise NotImplementedError

    def draw_line(self, start: PixelPoint, end: PixelPoint, color: RGB, width: float):
        raise NotImplementedError

    def draw_gradient_line(
        self, start: PixelPoint, end: PixelPoint,
        start_color: RGB, end_color: RGB, width: float,
    ):
        raise NotImplementedError

    def draw_arc(
        self, centre: PixelPoint, radius: float,
        start_angle: float, sweep_angle: float, color: RGB, width: float,
    ):
        raise NotImplementedError

    def draw_circle(self, centre: PixelPoint, radius: float, color: RGB, width: float):
        raise NotImplementedError

    def draw_text(self, text: str, origin: PixelPoint, color: RGB):
        """Draw text with its top-left corner at ``origin``."""
        raise NotImplementedError

    def measure_text(self, text: str, origin: PixelPoint) -> PixelRect:
        """Bounding rectangle the text would occupy if drawn at ``origin``."""
        raise NotImplementedError

    def rotate_about(self, point: PixelPoint, angle: float):
        """Rotate subsequent drawing by ``angle`` degrees about ``point``."""
        raise NotImplementedError

    def reset_transform(self):
        raise NotImplementedError
