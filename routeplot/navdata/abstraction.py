"""
Navigation Data Abstraction

The navigation database is owned by the host application. The resolver
only needs to enumerate its elements once per parse, so the interface is a
flat iterable of typed elements, each with an ordered list of positions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

from ..route.model import Position


class ElementType(Enum):
    """Navigation element kinds."""
    AIRPORT = "airport"
    VOR = "vor"
    NDB = "ndb"
    FIX = "fix"
    RUNWAY = "runway"
    SID = "sid"
    STAR = "star"
    LOW_AIRWAY = "low_airway"
    HIGH_AIRWAY = "high_airway"


POINT_TYPES = (ElementType.AIRPORT, ElementType.VOR, ElementType.NDB, ElementType.FIX)
AIRWAY_TYPES = (ElementType.LOW_AIRWAY, ElementType.HIGH_AIRWAY)


@dataclass
class NavElement:
    """
    One navigation database element.

    Point features carry a single position. Runways carry the two threshold
    positions, in the same order as ``runway_names``. Procedures and airways
    carry their ordered position sequence.
    """
    element_type: ElementType
    name: str
    positions: List[Position] = field(default_factory=list)
    airport_name: Optional[str] = None  # Runways and procedures
    runway_names: Tuple[str, ...] = ()  # Runway thresholds, or a procedure's runway

    @property
    def position(self) -> Optional[Position]:
        """First position, or None when the element has none."""
        return self.positions[0] if self.positions else None

    def runway_name(self, index: int) -> Optional[str]:
        if 0 <= index < len(self.runway_names):
            return self.runway_names[index]
        return None


class NavDatabase:
    """In-memory navigation database.

    Hosts with their own sector data can subclass this and override
    ``elements()``; the resolver never needs anything else.
    """

    def __init__(self, elements: Optional[Iterable[NavElement]] = None):
        self._elements: List[NavElement] = list(elements or [])

    def add(self, element: NavElement) -> "NavDatabase":
        self._elements.append(element)
        return self

    def elements(self) -> Iterator[NavElement]:
        """Enumerate every element in database order."""
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)
