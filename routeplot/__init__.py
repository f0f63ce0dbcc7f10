"""
Route Plotter - flight route overlays for radar displays

Turns ``.plot`` commands (legacy coordinate strings or flight plan routes)
into geographic paths and draws them with progress shading, holds and
non-overlapping labels on every radar refresh.
"""

__version__ = "0.4.1"

from .route.model import Hold, Waypoint, Discontinuity, Route, Position, RouteRegistry
from .sources.base import ParseError
from .plugin import RoutePlotter

__all__ = [
    "Hold",
    "Waypoint",
    "Discontinuity",
    "Route",
    "Position",
    "RouteRegistry",
    "ParseError",
    "RoutePlotter",
]
