"""
Flight Plan Route Source

Resolves an ICAO-style route string (``EGLL/27R BPK7F BPK L9 KONAN DCT
50N002W``) into a drawable route using the host navigation database.

Points alternate with connectors. ``DCT`` connectors join two points
directly; any other connector names an airway whose intermediate fixes are
spliced in. On the first and last legs the connector may instead name a SID
or STAR of the departure or arrival aerodrome.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..navdata.abstraction import AIRWAY_TYPES, POINT_TYPES, ElementType, NavDatabase, NavElement
from ..route.model import Hold, Position, Route, Waypoint
from .base import ParseError, ParseResult, Source

logger = logging.getLogger(__name__)

DIRECT = "DCT"
DEFAULT_HOLD_LENGTH = 4
MAX_RUNWAY_LENGTH = 3

_LATLON_RE = re.compile(r"(\d+)([NS])(\d*)([EW])")


class SequenceKind(Enum):
    """How a position sequence is attached to the route."""
    FREE = "free"                      # Airway: match both ends
    START_ANCHORED = "start_anchored"  # SID: starts at the aerodrome, match the far end only
    END_ANCHORED = "end_anchored"      # STAR: ends at the aerodrome, match the near end only


@dataclass
class HoldSuffix:
    course: int
    length: int
    left_turns: bool


@dataclass
class PointToken:
    """One parsed waypoint token."""
    name: str
    runway: Optional[str] = None
    hold: Optional[HoldSuffix] = None

    @property
    def is_literal(self) -> bool:
        return self.name[:1].isdigit()


@dataclass
class NavLookup:
    """Everything the resolver needs from one pass over the navigation database."""
    points: Dict[str, Position] = field(default_factory=dict)
    airways: Dict[str, List[Position]] = field(default_factory=dict)
    departure: Optional[Position] = None
    arrival: Optional[Position] = None
    sid: List[Position] = field(default_factory=list)
    star: List[Position] = field(default_factory=list)


def parse_latlon(text: str) -> Optional[Position]:
    """
    Parse a literal coordinate such as ``5030N00145W`` or ``50N002W``.

    Each digit run is split from the right into 2-digit groups (seconds,
    then minutes) while more than one pair of digits remains; whatever is
    left is whole degrees.

    Returns:
        Position, or None if the text is not a valid literal
    """
    match = _LATLON_RE.match(text)
    if not match:
        return None

    lat_digits, lat_hemi, lon_digits, lon_hemi = match.groups()
    lat = _sexagesimal(lat_digits)
    lon = _sexagesimal(lon_digits)

    if lat_hemi == "S":
        lat = -lat
    if lon_hemi == "W":
        lon = -lon

    return Position(lat, lon)


def _sexagesimal(digits: str) -> float:
    if not digits:
        return 0.0

    whole = int(digits)
    value = 0.0
    for _ in range(len(digits) // 2 - 1):
        value += whole % 100
        value /= 60.0
        whole //= 100
    return value + whole


def _parse_integer(text: str) -> int:
    """Parse an unsigned run of ASCII digits."""
    if not (text.isascii() and text.isdigit()):
        raise ParseError("invalid integer")
    return int(text)


def parse_point(token: str, terminal: bool) -> PointToken:
    """
    Parse a point token: ``NAME``, ``NAME/RWY`` or ``NAME/CCCd[len]``.

    Args:
        token: Raw token text
        terminal: True for the first and last points, where runways are allowed

    Raises:
        ParseError: On a malformed hold or a runway on an intermediate point
    """
    name, sep, suffix = token.partition("/")
    point = PointToken(name=name)

    if not sep:
        return point

    if len(suffix) > MAX_RUNWAY_LENGTH:
        course_text, direction, length_text = suffix[:3], suffix[3].upper(), suffix[4:]
        course = _parse_integer(course_text)
        if direction not in ("L", "R"):
            raise ParseError("invalid hold direction")

        length = _parse_integer(length_text) if length_text else DEFAULT_HOLD_LENGTH
        if length:
            point.hold = HoldSuffix(
                course=course,
                length=length,
                left_turns=direction == "L",
            )
    elif terminal:
        point.runway = suffix or None
    else:
        raise ParseError("runway in nonterminal location")

    return point


class FlightPlanSource(Source):
    """Plot a flight plan route resolved against the navigation database."""

    kind = "route"
    help_arguments = "<ROUTE>"
    help_description = "Plot a flight plan route"

    def __init__(self, navdata: NavDatabase):
        self.navdata = navdata

    def parse(self, args: List[str], text: str = "") -> ParseResult:
        tokens = list(args)
        if not tokens:
            raise ParseError("missing route")

        name: Optional[str] = None
        if len(tokens) % 2 == 0:
            name = tokens.pop(0)

        points, connectors = self._tokenize(tokens)
        route = self.resolve(points, connectors)
        logger.debug(
            f"Resolved {len(points)} points and {len(connectors)} connectors "
            f"into {len(route)} nodes"
        )
        return ParseResult(route=route, name=name)

    def _tokenize(self, tokens: List[str]) -> Tuple[List[PointToken], List[Optional[str]]]:
        points: List[PointToken] = []
        connectors: List[Optional[str]] = []

        last = len(tokens) - 1
        for i, token in enumerate(tokens):
            if i % 2 == 0:
                points.append(parse_point(token, terminal=i == 0 or i == last))
            else:
                connectors.append(None if token == DIRECT else token)

        return points, connectors

    def resolve(self, points: List[PointToken], connectors: List[Optional[str]]) -> Route:
        """
        Resolve parsed points and connectors into a route.

        Args:
            points: Point tokens, one more than connectors
            connectors: Airway/procedure names between points, None for direct

        Returns:
            Route with spliced airway/procedure fixes, labels and holds

        Raises:
            ParseError: If a point, airway or junction cannot be found
        """
        lookup = self.lookup(points, connectors)

        if lookup.star and lookup.arrival is not None:
            lookup.star.append(lookup.arrival)

        route: Route = []
        last = len(points) - 1
        seg_start: Optional[Position] = None

        for i, point in enumerate(points):
            if i == 0 and lookup.sid:
                seg_end = lookup.departure
            elif i == last and lookup.star:
                seg_end = lookup.arrival
            else:
                seg_end = lookup.points.get(point.name)

            if seg_end is None or math.isnan(seg_end.lat) or math.isnan(seg_end.lon):
                raise ParseError(f"could not find point '{point.name}'")

            connector = connectors[i - 1] if i > 0 else None
            if connector is not None:
                if i == 1 and lookup.sid:
                    sequence, kind = lookup.sid, SequenceKind.START_ANCHORED
                elif i == last and lookup.star:
                    sequence, kind = lookup.star, SequenceKind.END_ANCHORED
                else:
                    sequence = lookup.airways.get(connector)
                    kind = SequenceKind.FREE
                    if not sequence:
                        raise ParseError(f"could not find airway '{connector}'")

                route.extend(
                    pos.to_waypoint()
                    for pos in self._splice(
                        sequence, kind, seg_start, seg_end,
                        points[i - 1].name, connector, point.name,
                    )
                )

            node = seg_end.to_waypoint()
            if point.hold:
                node.hold = Hold(
                    length=float(point.hold.length),
                    course=float(point.hold.course),
                    left_turns=point.hold.left_turns,
                )
            if not point.is_literal:
                node.label = point.name

            route.append(node)
            seg_start = seg_end

        return route

    @staticmethod
    def _splice(
        sequence: List[Position],
        kind: SequenceKind,
        seg_start: Position,
        seg_end: Position,
        from_name: str,
        via_name: str,
        to_name: str,
    ) -> List[Position]:
        """
        Positions of ``sequence`` strictly between the segment endpoints.

        An anchored side behaves as if matched one step beyond the end of the
        sequence, so its boundary element is included.
        """
        if kind == SequenceKind.START_ANCHORED:
            start = -1
        else:
            try:
                start = sequence.index(seg_start)
            except ValueError:
                raise ParseError(f"discontinuity between '{from_name}' and '{via_name}'")

        if kind == SequenceKind.END_ANCHORED:
            end = len(sequence)
        else:
            try:
                end = sequence.index(seg_end)
            except ValueError:
                raise ParseError(f"discontinuity between '{via_name}' and '{to_name}'")

        if start < end:
            return sequence[start + 1:end]
        return sequence[end + 1:start][::-1]

    def lookup(self, points: List[PointToken], connectors: List[Optional[str]]) -> NavLookup:
        """
        Collect point positions, aerodromes, procedures and airways in one
        pass over the navigation database.
        """
        result = NavLookup()
        unresolved = float("nan")

        for point in points:
            if point.name in result.points:
                continue
            if point.is_literal:
                position = parse_latlon(point.name)
                if position is None:
                    logger.debug(f"Malformed coordinate literal '{point.name}'")
                    position = Position(unresolved, unresolved)
                result.points[point.name] = position

        wanted_airways = {c for c in connectors if c is not None}
        for name in wanted_airways:
            result.airways[name] = []

        first, final = points[0], points[-1]
        first_connector = connectors[0] if connectors else None
        final_connector = connectors[-1] if connectors else None

        for el in self.navdata.elements():
            el_type = el.element_type

            if el_type == ElementType.AIRPORT and el.position is not None:
                if first.runway is None and first.name == el.name:
                    result.departure = el.position
                if final.runway is None and final.name == el.name:
                    result.arrival = el.position

            if el_type in POINT_TYPES:
                self._match_point(result, points, el)

            elif el_type == ElementType.RUNWAY:
                departure = self._match_runway(first, el)
                if departure is not None:
                    result.departure = departure
                arrival = self._match_runway(final, el)
                if arrival is not None:
                    result.arrival = arrival

            elif el_type == ElementType.SID:
                if not result.sid and self._match_procedure(first, first_connector, el):
                    result.sid = list(el.positions)

            elif el_type == ElementType.STAR:
                if not result.star and self._match_procedure(final, final_connector, el):
                    result.star = list(el.positions)

            elif el_type in AIRWAY_TYPES and el.name in wanted_airways:
                positions = result.airways[el.name]
                for pos in el.positions:
                    if not positions or positions[-1] != pos:
                        positions.append(pos)

        return result

    @staticmethod
    def _match_point(result: NavLookup, points: List[PointToken], el: NavElement):
        if el.position is None:
            return
        for point in points:
            if point.name == el.name and not point.is_literal:
                result.points[point.name] = el.position
                return

    @staticmethod
    def _match_runway(point: PointToken, el: NavElement) -> Optional[Position]:
        if point.runway is None or el.airport_name is None:
            return None
        if point.name[:4] != el.airport_name[:4]:
            return None

        found = None
        for j in range(2):
            if point.runway == el.runway_name(j) and j < len(el.positions):
                found = el.positions[j]
        return found

    @staticmethod
    def _match_procedure(point: PointToken, connector: Optional[str], el: NavElement) -> bool:
        if connector is None or connector != el.name:
            return False
        if point.name != el.airport_name:
            return False
        return point.runway is None or point.runway == el.runway_name(0)
