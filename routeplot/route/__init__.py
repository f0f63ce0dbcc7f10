"""Route data model and registry."""

from .model import (
    Hold,
    Waypoint,
    Discontinuity,
    Node,
    Route,
    Position,
    RouteRegistry,
)

__all__ = [
    "Hold",
    "Waypoint",
    "Discontinuity",
    "Node",
    "Route",
    "Position",
    "RouteRegistry",
]
