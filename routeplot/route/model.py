"""
Route Data Model

The node/route/hold vocabulary shared by the parsers, the registry and the
renderer. A route is an ordered list of nodes; each node is either a real
waypoint or a discontinuity that breaks the drawn line.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union
import logging

logger = logging.getLogger(__name__)


@dataclass
class Hold:
    """A racetrack holding pattern attached to a single waypoint."""
    length: float  # Outbound leg length (nm)
    course: float  # Inbound course flown to the fix (degrees)
    left_turns: bool = False


@dataclass
class Waypoint:
    """A real point of a route."""
    lat: float
    lon: float
    highlight: bool = False
    label: str = ""
    hold: Optional[Hold] = None

    @property
    def is_discontinuity(self) -> bool:
        return False

    @property
    def position(self) -> "Position":
        return Position(self.lat, self.lon)


@dataclass(frozen=True)
class Discontinuity:
    """A break in the drawn line. Carries no position, label or hold."""

    @property
    def is_discontinuity(self) -> bool:
        return True


Node = Union[Waypoint, Discontinuity]
Route = List[Node]


@dataclass(frozen=True)
class Position:
    """A plain geographic position with value equality."""
    lat: float
    lon: float

    def to_waypoint(self) -> Waypoint:
        return Waypoint(self.lat, self.lon)


class RouteRegistry:
    """
    Name-keyed store of plotted routes.

    Entries are created by successful parses, overwritten when a name is
    reused and removed by explicit clears. Nothing else mutates them.

    The registry is not thread-safe. It is owned by one plotter instance and
    must only be touched from the host's single command/refresh thread.
    """

    def __init__(self):
        self._routes: Dict[str, Route] = {}

    def store(self, name: str, route: Route) -> bool:
        """
        Store a route under a name, replacing any previous route.

        Args:
            name: Route key
            route: Nodes to store

        Returns:
            True if stored, False if the route was empty
        """
        if not route:
            logger.debug(f"Not storing empty route '{name}'")
            return False

        self._routes[name] = list(route)
        logger.debug(f"Stored route '{name}' with {len(route)} nodes")
        return True

    def get(self, name: str) -> Optional[Route]:
        return self._routes.get(name)

    def remove(self, *names: str) -> int:
        """Remove the named routes, ignoring unknown names. Returns the count removed."""
        removed = 0
        for name in names:
            if self._routes.pop(name, None) is not None:
                removed += 1
        return removed

    def clear(self):
        self._routes.clear()

    def names(self) -> List[str]:
        return list(self._routes)

    def items(self) -> Iterator[Tuple[str, Route]]:
        return iter(list(self._routes.items()))

    def __iter__(self) -> Iterator[Tuple[str, Route]]:
        return self.items()

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, name: str) -> bool:
        return name in self._routes
