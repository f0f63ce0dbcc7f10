"""
YAML Navigation Data Loader

Reads a navigation database from a YAML file so the plotter can run outside
of a radar client (CLI, tests, offline previews).

Format::

    airports: {EGLL: [51.4775, -0.4614]}
    vors:     {BPK: [51.7497, -0.1067]}
    ndbs:     {}
    fixes:    {BUZAD: [51.66, -0.58]}
    runways:
      - airport: EGLL
        names: [09L, 27R]
        thresholds: [[51.4775, -0.4850], [51.4776, -0.4332]]
    sids:
      - {airport: EGLL, runway: 27R, name: BPK7F, points: [[..], ..]}
    stars:
      - {airport: EGLL, name: LAM3A, points: [[..], ..]}
    airways:
      - {name: L9, high: false, points: [[..], ..]}
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from ..route.model import Position
from .abstraction import ElementType, NavDatabase, NavElement

logger = logging.getLogger(__name__)


_POINT_SECTIONS = {
    "airports": ElementType.AIRPORT,
    "vors": ElementType.VOR,
    "ndbs": ElementType.NDB,
    "fixes": ElementType.FIX,
}


def _position(value: Any, where: str) -> Position:
    try:
        lat, lon = value
        return Position(float(lat), float(lon))
    except (TypeError, ValueError):
        raise ValueError(f"Invalid position in {where}: {value!r}")


def _positions(values: Any, where: str) -> List[Position]:
    if not isinstance(values, list):
        raise ValueError(f"Expected a list of positions in {where}")
    return [_position(v, where) for v in values]


def navdata_from_dict(data: Dict[str, Any]) -> NavDatabase:
    """
    Build a navigation database from parsed YAML data.

    Args:
        data: Mapping with any of the sections described in the module docstring

    Returns:
        NavDatabase with elements in file order
    """
    db = NavDatabase()

    for section, element_type in _POINT_SECTIONS.items():
        for name, value in (data.get(section) or {}).items():
            db.add(NavElement(
                element_type=element_type,
                name=str(name),
                positions=[_position(value, f"{section}.{name}")],
            ))

    for i, runway in enumerate(data.get("runways") or []):
        where = f"runways[{i}]"
        names = tuple(str(n) for n in runway.get("names", ()))
        thresholds = _positions(runway.get("thresholds", []), where)
        if len(names) != 2 or len(thresholds) != 2:
            raise ValueError(f"{where} needs exactly two names and two thresholds")
        db.add(NavElement(
            element_type=ElementType.RUNWAY,
            name=f"{names[0]}/{names[1]}",
            positions=thresholds,
            airport_name=str(runway["airport"]),
            runway_names=names,
        ))

    for section, element_type in (("sids", ElementType.SID), ("stars", ElementType.STAR)):
        for i, proc in enumerate(data.get(section) or []):
            runway = proc.get("runway")
            db.add(NavElement(
                element_type=element_type,
                name=str(proc["name"]),
                positions=_positions(proc.get("points", []), f"{section}[{i}]"),
                airport_name=str(proc["airport"]),
                runway_names=(str(runway),) if runway is not None else (),
            ))

    for i, airway in enumerate(data.get("airways") or []):
        element_type = ElementType.HIGH_AIRWAY if airway.get("high") else ElementType.LOW_AIRWAY
        db.add(NavElement(
            element_type=element_type,
            name=str(airway["name"]),
            positions=_positions(airway.get("points", []), f"airways[{i}]"),
        ))

    return db


def load_navdata(path: Union[str, Path]) -> NavDatabase:
    """
    Load a navigation database from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Navigation data file not found: {path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Navigation data must be a mapping: {path}")

    try:
        db = navdata_from_dict(data)
    except KeyError as e:
        raise ValueError(f"Missing required key {e} in {path}")

    logger.debug(f"Loaded {len(db)} navigation elements from {path}")
    return db
