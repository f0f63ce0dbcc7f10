"""
Route Plotter Plugin

Host-facing entry point. The radar client forwards every typed command to
``on_command`` and every screen refresh to ``on_refresh``; both are called
from the client's single UI thread, which is the only thread allowed to
touch the route registry.

Command grammar::

    .plot help
    .plot clear [NAME]...
    .plot <kind> [NAME] <args...>
    .plot [NAME] <route...>          (shortcut for ".plot route ...")
"""

import logging
import re
from typing import Callable, Dict, List, Optional

from .navdata.abstraction import NavDatabase
from .render.renderer import FrameStats, RouteRenderer
from .render.settings import DisplaySettings
from .render.surface import Canvas, Projection
from .route.model import RouteRegistry
from .sources.base import ParseError, Source
from .sources.coords import CoordsSource
from .sources.flightplan import FlightPlanSource

logger = logging.getLogger(__name__)

PLUGIN_NAME = "Route plotter"
COMMAND_PREFIX = ".plot"
DEFAULT_SOURCE = "route"

DisplayCallback = Callable[..., None]
RefreshCallback = Callable[[], None]


def _log_message(sender: str, message: str, urgent: bool = False):
    """Fallback message sink when the host gives none."""
    text = f"{sender}: {message}" if sender else message
    if urgent:
        logger.warning(text)
    else:
        logger.info(text)


def skip_tokens(command: str, count: int) -> str:
    """Raw text of ``command`` after its first ``count`` whitespace-separated tokens."""
    match = re.match(r"\s*(?:\S+\s+){%d}" % count, command)
    if not match:
        return ""
    return command[match.end():].rstrip()


class RoutePlotter:
    """
    Owns the route registry and turns commands into stored routes.

    Usage:
        plotter = RoutePlotter(navdata, display=client.show_message)
        plotter.add_screen(screen.invalidate)

        plotter.on_command(".plot EGLL DCT BPK L9 KONAN")
        plotter.on_refresh(canvas, projection)
    """

    def __init__(
        self,
        navdata: Optional[NavDatabase] = None,
        display: Optional[DisplayCallback] = None,
        settings: Optional[DisplaySettings] = None,
    ):
        """
        Initialize plotter.

        Args:
            navdata: Navigation database used to resolve flight plan routes
            display: ``display(sender, message, urgent=False)`` message sink
            settings: Renderer settings, defaults to display_settings.yaml
        """
        self.routes = RouteRegistry()
        self.sources: Dict[str, Source] = {
            "coords": CoordsSource(),
            "route": FlightPlanSource(navdata or NavDatabase()),
        }
        self.renderer = RouteRenderer(settings)
        self.display = display or _log_message

        self._screens: List[RefreshCallback] = []
        self._name_counter = 0

    def add_screen(self, refresh: RefreshCallback) -> RefreshCallback:
        """Register a callback that repaints a radar screen after route changes."""
        self._screens.append(refresh)
        return refresh

    def remove_screen(self, refresh: RefreshCallback):
        if refresh in self._screens:
            self._screens.remove(refresh)

    def _refresh_screens(self):
        for refresh in list(self._screens):
            refresh()

    def on_command(self, command: str) -> bool:
        """
        Handle a typed command.

        Returns:
            True if the command was ours and succeeded, False if it was not a
            plot command or failed to parse
        """
        parts = command.split()
        if not parts or parts[0] != COMMAND_PREFIX:
            return False

        if len(parts) == 1 or parts[1] == "help":
            self.show_help()
            return True

        if parts[1] == "clear":
            self.clear(*parts[2:])
            return True

        source = self.sources.get(parts[1])
        offset = 2
        if source is None:
            source = self.sources[DEFAULT_SOURCE]
            offset = 1

        self._name_counter += 1
        name = str(self._name_counter)

        try:
            result = source.parse(parts[offset:], skip_tokens(command, offset))
        except ParseError as e:
            logger.debug(f"Failed to parse '{command}': {e}")
            self.display("Error", str(e), urgent=True)
            return False

        if result.name:
            name = result.name

        if self.routes.store(name, result.route):
            logger.info(f"Plotted '{name}' ({source.kind}, {len(result.route)} nodes)")
            self._refresh_screens()

        return True

    def clear(self, *names: str):
        """Remove the named routes, or every route when no name is given."""
        if names:
            removed = self.routes.remove(*names)
            logger.debug(f"Cleared {removed} of {len(names)} named routes")
        else:
            self.routes.clear()
            logger.debug("Cleared all routes")

        self._refresh_screens()

    def help_lines(self) -> List[str]:
        """Formatted help text, one entry per line."""
        width = len("clear [NAME]...")
        for kind, source in self.sources.items():
            width = max(width, len(kind) + len(source.help_arguments) + len(" [NAME] "))

        def command_line(usage: str, description: str) -> str:
            return f"  {COMMAND_PREFIX} {usage:<{width}} - {description}"

        lines = [
            "Available commands:",
            command_line("help", "Display this help text"),
            command_line("clear [NAME]...", "Remove the named plot, or all plots"),
        ]
        for kind, source in self.sources.items():
            lines.append(command_line(
                f"{kind} [NAME] {source.help_arguments}", source.help_description
            ))
        lines.append(command_line(
            "[NAME] <ROUTE>", f'Shortcut for "{COMMAND_PREFIX} route [NAME] <ROUTE>"'
        ))
        return lines

    def show_help(self):
        for line in self.help_lines():
            self.display("", line)

    def on_refresh(self, canvas: Canvas, projection: Projection) -> FrameStats:
        """Draw every stored route for one screen refresh."""
        return self.renderer.render(self.routes, canvas, projection)
