"""Navigation database interface and loaders."""

from .abstraction import ElementType, NavElement, NavDatabase
from .yaml_loader import load_navdata, navdata_from_dict

__all__ = [
    "ElementType",
    "NavElement",
    "NavDatabase",
    "load_navdata",
    "navdata_from_dict",
]
