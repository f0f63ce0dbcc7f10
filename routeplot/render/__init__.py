"""Route rendering: hold geometry, colouring and the refresh renderer."""

from .colors import progress, progress_color
from .hold import HoldOutline, compute_hold_outline, draw_hold, hold_reference_position
from .renderer import FrameStats, PathLabel, RouteRenderer
from .settings import DisplaySettings, get_display_settings
from .surface import Canvas, PixelPoint, PixelRect, Projection
from .svg import EquirectangularProjection, SvgCanvas

__all__ = [
    "progress",
    "progress_color",
    "HoldOutline",
    "compute_hold_outline",
    "draw_hold",
    "hold_reference_position",
    "FrameStats",
    "PathLabel",
    "RouteRenderer",
    "DisplaySettings",
    "get_display_settings",
    "Canvas",
    "PixelPoint",
    "PixelRect",
    "Projection",
    "EquirectangularProjection",
    "SvgCanvas",
]
