"""
Shared test fixtures for route plotter tests.

Provides a small synthetic navigation database, a recording canvas and a
linear projection so parsers and the renderer can be tested without a
radar client.
"""

import pytest
from typing import Any, List, Tuple

from routeplot.navdata.abstraction import ElementType, NavDatabase, NavElement
from routeplot.render.surface import Canvas, PixelPoint, PixelRect, Projection
from routeplot.route.model import Position


# Fixes on a north-south line at 1W, plus a few off-airway points
FIXES = {
    "AAA": Position(51.0, -1.0),
    "BBB": Position(51.5, -1.0),
    "CCC": Position(52.0, -1.0),
    "DDD": Position(52.5, -1.0),
    "EEE": Position(53.0, -1.0),
    "ZZZ": Position(54.0, 0.0),
    "A": Position(50.0, 0.0),
    "B": Position(50.0, 1.0),
}

EGLL = Position(51.4775, -0.4614)
EGKK = Position(51.1481, -0.1903)
EGLL_09L = Position(51.4775, -0.4850)
EGLL_27R = Position(51.4776, -0.4332)

SID_POINTS = [Position(51.48, -0.50), Position(51.49, -0.70), FIXES["BBB"]]
STAR_POINTS = [FIXES["DDD"], Position(51.6, -0.5), Position(51.3, -0.3)]


@pytest.fixture
def navdata() -> NavDatabase:
    """Navigation database with airports, a runway, an airway, a SID and a STAR."""
    db = NavDatabase()

    db.add(NavElement(ElementType.AIRPORT, "EGLL", [EGLL]))
    db.add(NavElement(ElementType.AIRPORT, "EGKK", [EGKK]))

    for name, pos in FIXES.items():
        db.add(NavElement(ElementType.FIX, name, [pos]))

    db.add(NavElement(
        ElementType.RUNWAY, "09L/27R", [EGLL_09L, EGLL_27R],
        airport_name="EGLL", runway_names=("09L", "27R"),
    ))

    # Airway stored as two segments with a repeated junction
    db.add(NavElement(
        ElementType.HIGH_AIRWAY, "L1",
        [FIXES["AAA"], FIXES["BBB"], FIXES["BBB"], FIXES["CCC"]],
    ))
    db.add(NavElement(
        ElementType.HIGH_AIRWAY, "L1",
        [FIXES["CCC"], FIXES["DDD"], FIXES["EEE"]],
    ))

    db.add(NavElement(
        ElementType.SID, "BPK7F", list(SID_POINTS),
        airport_name="EGLL", runway_names=("27R",),
    ))
    db.add(NavElement(
        ElementType.STAR, "ASTR1", list(STAR_POINTS),
        airport_name="EGKK",
    ))

    return db


class RecordingCanvas(Canvas):
    """Canvas that records every drawing call."""

    def __init__(self, char_width: float = 6.0, line_height: float = 12.0):
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.char_width = char_width
        self.line_height = line_height
        self.clip = None
        self.transform = None

    def _record(self, name, *args):
        self.calls.append((name, args))

    def set_clip(self, rect):
        self.clip = rect
        self._record("set_clip", rect)

    def reset_clip(self):
        self.clip = None
        self._record("reset_clip")

    def draw_line(self, start, end, color, width):
        self._record("line", start, end, color)

    def draw_gradient_line(self, start, end, start_color, end_color, width):
        self._record("gradient_line", start, end, start_color, end_color)

    def draw_arc(self, centre, radius, start_angle, sweep_angle, color, width):
        self._record("arc", centre, radius, start_angle, sweep_angle, color)

    def draw_circle(self, centre, radius, color, width):
        self._record("circle", centre, radius)

    def draw_text(self, text, origin, color):
        self._record("text", text, origin, self.transform)

    def measure_text(self, text, origin):
        return PixelRect(origin.x, origin.y, len(text) * self.char_width, self.line_height)

    def rotate_about(self, point, angle):
        self.transform = (point, angle)
        self._record("rotate", point, angle)

    def reset_transform(self):
        self.transform = None
        self._record("reset_transform")

    def named(self, name: str) -> List[Tuple[Any, ...]]:
        return [args for call, args in self.calls if call == name]


class LinearProjection(Projection):
    """10 px per degree, origin at (500, 500), north up."""

    def __init__(self, scale: float = 10.0, size: float = 1000.0):
        self.scale = scale
        self.size = size

    def to_pixel(self, lat, lon):
        return PixelPoint(self.size / 2 + lon * self.scale, self.size / 2 - lat * self.scale)

    def viewport(self):
        return PixelRect(0, 0, self.size, self.size)


@pytest.fixture
def canvas() -> RecordingCanvas:
    return RecordingCanvas()


@pytest.fixture
def projection() -> LinearProjection:
    return LinearProjection()


@pytest.fixture
def fixes():
    return dict(FIXES)


@pytest.fixture
def procedures():
    """(SID positions, STAR positions) from the navdata fixture."""
    return list(SID_POINTS), list(STAR_POINTS)


@pytest.fixture
def airports():
    return {"EGLL": EGLL, "EGKK": EGKK, "EGLL/09L": EGLL_09L, "EGLL/27R": EGLL_27R}
