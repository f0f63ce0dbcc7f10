"""SVG rendering backend.

A stand-in for the radar client's graphics context: renders a frame to an
SVG document so routes can be previewed, exported, and checked in tests
without a host application.
"""

import html
import math
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from ..route.model import Route, Waypoint
from .colors import RGB, to_hex
from .surface import Canvas, PixelPoint, PixelRect, Projection

logger = logging.getLogger(__name__)

# Average glyph advance and line height relative to the font size
CHAR_WIDTH_RATIO = 0.6
LINE_HEIGHT_RATIO = 1.2


class EquirectangularProjection(Projection):
    """Flat projection centred on a point, ``scale`` pixels per degree of latitude."""

    def __init__(
        self,
        centre_lat: float,
        centre_lon: float,
        scale: float,
        width: int = 1024,
        height: int = 768,
    ):
        self.centre_lat = centre_lat
        self.centre_lon = centre_lon
        self.scale = scale
        self.width = width
        self.height = height
        self._lon_factor = math.cos(math.radians(centre_lat))

    def to_pixel(self, lat: float, lon: float) -> PixelPoint:
        return PixelPoint(
            self.width / 2 + (lon - self.centre_lon) * self.scale * self._lon_factor,
            self.height / 2 - (lat - self.centre_lat) * self.scale,
        )

    def viewport(self) -> PixelRect:
        return PixelRect(0, 0, self.width, self.height)

    @classmethod
    def fit(
        cls,
        routes: Iterable[Tuple[str, Route]],
        width: int = 1024,
        height: int = 768,
        margin: float = 0.1,
    ) -> "EquirectangularProjection":
        """
        Build a projection that shows every waypoint of the given routes.

        Args:
            routes: (name, route) pairs
            width: Viewport width in pixels
            height: Viewport height in pixels
            margin: Fraction of the viewport left empty around the routes
        """
        lats: List[float] = []
        lons: List[float] = []
        for _, route in routes:
            for node in route:
                if isinstance(node, Waypoint):
                    lats.append(node.lat)
                    lons.append(node.lon)

        if not lats:
            logger.warning("No waypoints to fit, using default view centred at 0,0")
            return cls(0.0, 0.0, 10.0, width, height)

        centre_lat = (min(lats) + max(lats)) / 2
        centre_lon = (min(lons) + max(lons)) / 2
        lon_factor = math.cos(math.radians(centre_lat)) or 1.0

        span_lat = max(max(lats) - min(lats), 1e-3)
        span_lon = max((max(lons) - min(lons)) * lon_factor, 1e-3)
        usable = 1.0 - 2 * margin
        scale = min(width * usable / span_lon, height * usable / span_lat)

        return cls(centre_lat, centre_lon, scale, width, height)


class SvgCanvas(Canvas):
    """Canvas that records drawing calls as SVG elements."""

    def __init__(
        self,
        width: int,
        height: int,
        font_family: str = "monospace",
        font_size: int = 12,
        background: Optional[str] = "#000000",
    ):
        self.width = width
        self.height = height
        self.font_family = font_family
        self.font_size = font_size
        self.background = background

        self._defs: List[str] = []
        self._elements: List[str] = []
        self._clip_id: Optional[str] = None
        self._transform: str = ""
        self._gradient_count = 0
        self._clip_count = 0

    def set_clip(self, rect: PixelRect):
        self._clip_count += 1
        self._clip_id = f"clip{self._clip_count}"
        self._defs.append(
            f'<clipPath id="{self._clip_id}"><rect x="{rect.x}" y="{rect.y}" '
            f'width="{rect.width}" height="{rect.height}"/></clipPath>'
        )

    def reset_clip(self):
        self._clip_id = None

    def _attrs(self) -> str:
        attrs = ""
        if self._clip_id:
            attrs += f' clip-path="url(#{self._clip_id})"'
        if self._transform:
            attrs += f' transform="{self._transform}"'
        return attrs

    def draw_line(self, start: PixelPoint, end: PixelPoint, color: RGB, width: float):
        self._elements.append(
            f'<line x1="{start.x:.2f}" y1="{start.y:.2f}" x2="{end.x:.2f}" y2="{end.y:.2f}" '
            f'stroke="{to_hex(color)}" stroke-width="{width}"{self._attrs()}/>'
        )

    def draw_gradient_line(
        self, start: PixelPoint, end: PixelPoint,
        start_color: RGB, end_color: RGB, width: float,
    ):
        self._gradient_count += 1
        gradient_id = f"grad{self._gradient_count}"
        self._defs.append(
            f'<linearGradient id="{gradient_id}" gradientUnits="userSpaceOnUse" '
            f'x1="{start.x:.2f}" y1="{start.y:.2f}" x2="{end.x:.2f}" y2="{end.y:.2f}">'
            f'<stop offset="0" stop-color="{to_hex(start_color)}"/>'
            f'<stop offset="1" stop-color="{to_hex(end_color)}"/>'
            f'</linearGradient>'
        )
        self._elements.append(
            f'<line x1="{start.x:.2f}" y1="{start.y:.2f}" x2="{end.x:.2f}" y2="{end.y:.2f}" '
            f'stroke="url(#{gradient_id})" stroke-width="{width}"{self._attrs()}/>'
        )

    def draw_arc(
        self, centre: PixelPoint, radius: float,
        start_angle: float, sweep_angle: float, color: RGB, width: float,
    ):
        a0 = math.radians(start_angle)
        a1 = math.radians(start_angle + sweep_angle)
        x0 = centre.x + radius * math.cos(a0)
        y0 = centre.y + radius * math.sin(a0)
        x1 = centre.x + radius * math.cos(a1)
        y1 = centre.y + radius * math.sin(a1)
        large_arc = 1 if abs(sweep_angle) > 180 else 0
        sweep_flag = 1 if sweep_angle > 0 else 0
        self._elements.append(
            f'<path d="M {x0:.2f} {y0:.2f} A {radius:.2f} {radius:.2f} 0 {large_arc} {sweep_flag} '
            f'{x1:.2f} {y1:.2f}" fill="none" stroke="{to_hex(color)}" '
            f'stroke-width="{width}"{self._attrs()}/>'
        )

    def draw_circle(self, centre: PixelPoint, radius: float, color: RGB, width: float):
        self._elements.append(
            f'<circle cx="{centre.x:.2f}" cy="{centre.y:.2f}" r="{radius}" fill="none" '
            f'stroke="{to_hex(color)}" stroke-width="{width}"{self._attrs()}/>'
        )

    def draw_text(self, text: str, origin: PixelPoint, color: RGB):
        # SVG positions text by its baseline; origin is the top-left corner
        baseline = origin.y + self.font_size
        self._elements.append(
            f'<text x="{origin.x:.2f}" y="{baseline:.2f}" font-family="{html.escape(self.font_family)}" '
            f'font-size="{self.font_size}" fill="{to_hex(color)}"{self._attrs()}>'
            f'{html.escape(text)}</text>'
        )

    def measure_text(self, text: str, origin: PixelPoint) -> PixelRect:
        return PixelRect(
            origin.x,
            origin.y,
            len(text) * self.font_size * CHAR_WIDTH_RATIO,
            self.font_size * LINE_HEIGHT_RATIO,
        )

    def rotate_about(self, point: PixelPoint, angle: float):
        self._transform = f"rotate({angle:.2f} {point.x:.2f} {point.y:.2f})"

    def reset_transform(self):
        self._transform = ""

    @property
    def element_count(self) -> int:
        return len(self._elements)

    def to_svg(self) -> str:
        """Render recorded drawing calls as an SVG document."""
        lines = [
            f'<svg xmlns="http://www.w3.org/2000/svg" '
            f'width="{self.width}" height="{self.height}" '
            f'viewBox="0 0 {self.width} {self.height}">'
        ]
        if self._defs:
            lines.append("<defs>")
            lines.extend(self._defs)
            lines.append("</defs>")
        if self.background:
            lines.append(f'<rect width="100%" height="100%" fill="{self.background}"/>')
        lines.extend(self._elements)
        lines.append("</svg>")
        return "\n".join(lines)

    def save(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.write_text(self.to_svg())
        logger.debug(f"Exported frame to {path}")
        return path
