"""Route sources: command arguments to routes."""

from .base import ParseError, ParseResult, Source
from .coords import CoordsSource
from .flightplan import FlightPlanSource

__all__ = [
    "ParseError",
    "ParseResult",
    "Source",
    "CoordsSource",
    "FlightPlanSource",
]
