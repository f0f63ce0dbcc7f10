"""
Route Sources

A source turns the argument part of a ``.plot`` command into a route. The
set of sources is closed: the plotter builds one instance of each kind at
startup and dispatches on the kind name.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from ..route.model import Route


class ParseError(ValueError):
    """A command could not be turned into a route.

    The message is shown to the user as-is.
    """


@dataclass
class ParseResult:
    """Result of parsing one command."""
    route: Route = field(default_factory=list)
    name: Optional[str] = None  # Explicit route name, if the command gave one


class Source:
    """Base class for route sources."""

    kind: str = ""
    help_arguments: str = ""
    help_description: str = "null source"

    def parse(self, args: List[str], text: str) -> ParseResult:
        """
        Parse command arguments into a route.

        Args:
            args: Whitespace-separated argument tokens
            text: Raw command text starting at the first argument

        Returns:
            ParseResult with the route and optional name

        Raises:
            ParseError: If the input cannot be decoded
        """
        raise ParseError("not implemented")
