"""
Route renderer.

Draws every stored route on each radar refresh:

1. holds and progress-coloured lines, route by route;
2. rotated route-name labels spaced evenly along each route;
3. fix markers and fix labels, skipping any label that would overlap one
   already drawn this frame.
"""

import math
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..route.model import Route, Waypoint
from .colors import from_hex, progress, progress_color
from .hold import compute_hold_outline, draw_hold, hold_reference_position
from .settings import DisplaySettings, get_display_settings
from .surface import Canvas, PixelPoint, PixelRect, Projection

logger = logging.getLogger(__name__)


@dataclass
class PathLabel:
    """A route-name label placed along a drawn segment."""
    text: str
    position: PixelPoint
    angle: float  # Radians, counter-clockwise on screen


@dataclass
class FrameStats:
    """What one refresh actually drew."""
    lines: int = 0
    holds: int = 0
    path_labels: int = 0
    markers: int = 0
    fix_labels: int = 0
    dropped_labels: int = 0


def segment_angle(start: PixelPoint, end: PixelPoint) -> float:
    """Screen angle of a segment folded into (-90, 90] degrees so text stays upright."""
    dx = end.x - start.x
    dy = start.y - end.y
    if dx == 0:
        return math.copysign(math.pi / 2, dy)
    return math.atan(dy / dx)


class RouteRenderer:
    """Renders a route registry onto a host canvas."""

    def __init__(self, settings: Optional[DisplaySettings] = None):
        self.settings = settings or get_display_settings()

    def render(
        self,
        routes: Iterable[Tuple[str, Route]],
        canvas: Canvas,
        projection: Projection,
    ) -> FrameStats:
        """
        Draw all routes for one refresh.

        Args:
            routes: (name, route) pairs, usually a RouteRegistry
            canvas: Host graphics context
            projection: Host geographic-to-pixel projection

        Returns:
            FrameStats with counts of drawn elements
        """
        stats = FrameStats()
        routes = list(routes)

        clip = projection.viewport()
        canvas.set_clip(clip)

        try:
            interval = self.settings.label_interval * clip.height
            labels: List[PathLabel] = []

            for name, route in routes:
                labels.extend(self._draw_route(name, route, canvas, projection, clip, interval, stats))

            self._draw_path_labels(labels, canvas, stats)
            self._draw_markers(routes, canvas, projection, stats)
        finally:
            canvas.reset_transform()
            canvas.reset_clip()

        logger.debug(
            f"Rendered {len(routes)} routes: {stats.lines} lines, {stats.holds} holds, "
            f"{stats.fix_labels} fix labels ({stats.dropped_labels} dropped)"
        )
        return stats

    def _draw_route(
        self,
        name: str,
        route: Route,
        canvas: Canvas,
        projection: Projection,
        clip: PixelRect,
        interval: float,
        stats: FrameStats,
    ) -> List[PathLabel]:
        """Draw holds and lines of one route, returning its path labels."""
        labels: List[PathLabel] = []
        count = len(route)
        stroke = self.settings.stroke_width

        # Carried across segments and discontinuities
        dist = 0.0
        previous: Optional[PixelPoint] = None

        for i, node in enumerate(route):
            if not isinstance(node, Waypoint):
                continue

            point = projection.to_pixel(node.lat, node.lon)
            t = progress(i, count)

            if node.hold is not None:
                ref_lat, ref_lon = hold_reference_position(
                    node.lat, node.lon, node.hold, self.settings.nm_per_deg_lat
                )
                outline = compute_hold_outline(
                    point,
                    projection.to_pixel(ref_lat, ref_lon),
                    node.hold,
                    self.settings.hold_radius,
                )
                if outline is not None:
                    draw_hold(canvas, outline, progress_color(t), stroke)
                    stats.holds += 1

            if i > 0 and isinstance(route[i - 1], Waypoint) and previous is not None:
                canvas.draw_gradient_line(
                    previous, point,
                    progress_color(progress(i - 1, count)), progress_color(t),
                    stroke,
                )
                stats.lines += 1

                if clip.contains(point) and interval > 0:
                    dist = self._place_path_labels(name, previous, point, dist, interval, labels)

            previous = point

        return labels

    @staticmethod
    def _place_path_labels(
        name: str,
        start: PixelPoint,
        end: PixelPoint,
        dist: float,
        interval: float,
        labels: List[PathLabel],
    ) -> float:
        """
        Place labels every ``interval`` pixels of cumulative route length.

        Args:
            dist: Route length drawn since the last label, before this segment

        Returns:
            Route length since the last label, after this segment
        """
        length = math.hypot(end.x - start.x, end.y - start.y)
        angle = segment_angle(start, end)

        target = interval
        while target < dist + length:
            t = (target - dist) / length
            labels.append(PathLabel(
                text=name,
                position=PixelPoint(
                    (1.0 - t) * start.x + t * end.x,
                    (1.0 - t) * start.y + t * end.y,
                ),
                angle=angle,
            ))
            target += interval

        return math.fmod(dist + length, interval)

    def _draw_path_labels(self, labels: List[PathLabel], canvas: Canvas, stats: FrameStats):
        # Later labels are drawn over earlier ones
        color = from_hex(self.settings.path_label_color)
        for label in labels:
            canvas.rotate_about(label.position, -math.degrees(label.angle))
            canvas.draw_text(label.text, label.position, color)
            canvas.reset_transform()
            stats.path_labels += 1

    def _draw_markers(
        self,
        routes: List[Tuple[str, Route]],
        canvas: Canvas,
        projection: Projection,
        stats: FrameStats,
    ):
        """Draw fix markers, then fix labels where they do not overlap earlier ones."""
        marker_color = from_hex(self.settings.marker_color)
        label_color = from_hex(self.settings.fix_label_color)
        offset = self.settings.fix_label_offset
        half_font = self.settings.font_size / 2
        stroke = self.settings.stroke_width

        placed: List[PixelRect] = []

        for _, route in routes:
            for node in route:
                if not isinstance(node, Waypoint):
                    continue

                point = projection.to_pixel(node.lat, node.lon)
                r = self.settings.highlight_radius if node.highlight else self.settings.marker_radius
                canvas.draw_circle(point, r, marker_color, stroke)
                stats.markers += 1

                if not node.label:
                    continue

                origin = PixelPoint(point.x + r + offset, point.y - half_font)
                rect = canvas.measure_text(node.label, origin)

                if any(other.intersects(rect) for other in placed):
                    stats.dropped_labels += 1
                    continue

                canvas.draw_text(node.label, origin, label_color)
                placed.append(rect)
                stats.fix_labels += 1
