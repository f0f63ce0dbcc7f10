#!/usr/bin/env python3
"""
Route plotter CLI

Runs ``.plot`` commands outside of a radar client and renders the result to
SVG, or prints the decoded route nodes.

Usage:
    routeplot render <command>... --navdata nav.yaml -o plot.svg
    routeplot decode <command> [--navdata nav.yaml]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .navdata.abstraction import NavDatabase
from .plugin import COMMAND_PREFIX, RoutePlotter
from .render.settings import DisplaySettings
from .render.svg import EquirectangularProjection, SvgCanvas
from .route.model import Waypoint

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s %(levelname)s: %(message)s',
    )


def load_navdata_arg(path: Optional[str]) -> NavDatabase:
    """Load navigation data if a path was given, else an empty database."""
    if not path:
        return NavDatabase()

    from .navdata.yaml_loader import load_navdata
    return load_navdata(path)


def as_plot_command(text: str) -> str:
    """Accept commands with or without the ``.plot`` prefix."""
    stripped = text.strip()
    if stripped.split(" ", 1)[0] == COMMAND_PREFIX:
        return stripped
    return f"{COMMAND_PREFIX} {stripped}"


def _print_message(sender: str, message: str, urgent: bool = False):
    stream = sys.stderr if urgent else sys.stdout
    prefix = f"{sender}: " if sender else ""
    print(f"{prefix}{message}", file=stream)


def build_plotter(args) -> Optional[RoutePlotter]:
    try:
        navdata = load_navdata_arg(args.navdata)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return None

    settings = DisplaySettings(args.settings) if getattr(args, 'settings', None) else None
    return RoutePlotter(navdata, display=_print_message, settings=settings)


def cmd_render(args):
    """Plot commands and write the frame as SVG."""
    plotter = build_plotter(args)
    if plotter is None:
        return 1

    failed = 0
    for text in args.commands:
        if not plotter.on_command(as_plot_command(text)):
            failed += 1

    if not len(plotter.routes):
        print("Error: nothing to render", file=sys.stderr)
        return 1

    if args.centre:
        projection = EquirectangularProjection(
            args.centre[0], args.centre[1], args.scale or 100.0, args.width, args.height
        )
    else:
        projection = EquirectangularProjection.fit(plotter.routes, args.width, args.height)

    settings = plotter.renderer.settings
    canvas = SvgCanvas(
        args.width, args.height,
        font_family=settings.font_family, font_size=settings.font_size,
    )
    stats = plotter.on_refresh(canvas, projection)

    output = Path(args.output)
    canvas.save(output)

    print(f"Rendered {len(plotter.routes)} route(s) to {output}")
    if args.verbose:
        print(f"  Lines: {stats.lines}  Holds: {stats.holds}  Path labels: {stats.path_labels}")
        print(f"  Fix labels: {stats.fix_labels} ({stats.dropped_labels} dropped)")

    return 0 if failed == 0 else 1


def cmd_decode(args):
    """Plot one command and print its nodes."""
    plotter = build_plotter(args)
    if plotter is None:
        return 1

    if not plotter.on_command(as_plot_command(args.command)):
        return 1

    for name, route in plotter.routes:
        print(f"{name}: {len(route)} nodes")
        for i, node in enumerate(route):
            if not isinstance(node, Waypoint):
                print(f"  {i:3d}  ----")
                continue

            line = f"  {i:3d}  {node.lat:10.5f} {node.lon:11.5f}"
            if node.highlight:
                line += "  *"
            if node.label:
                line += f"  {node.label}"
            if node.hold:
                turn = "L" if node.hold.left_turns else "R"
                line += f"  hold {node.hold.course:03.0f}{turn} {node.hold.length:g}nm"
            print(line)

    return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Route plotter - flight route overlays",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Flight plan routes against a navigation data file
  routeplot render "EGLL/27R BPK7F BPK L9 KONAN" --navdata nav.yaml -o plot.svg

  # Legacy coordinate strings need no navigation data
  routeplot decode "coords MYPLOT ABCDEFG-CDEFGHI(FIX)"
        """,
    )

    parser.add_argument('--version', action='version', version=f'routeplot {__version__}')

    subparsers = parser.add_subparsers(dest='command_name', help='Available commands')

    # Render command
    render_parser = subparsers.add_parser('render', help='Render plot commands to SVG')
    render_parser.add_argument('commands', nargs='+', help='Plot commands, with or without ".plot"')
    render_parser.add_argument('-o', '--output', default='plot.svg', help='Output SVG path')
    render_parser.add_argument('--navdata', help='Navigation data YAML file')
    render_parser.add_argument('--settings', help='Display settings YAML file')
    render_parser.add_argument('--width', type=int, default=1024, help='Frame width (px)')
    render_parser.add_argument('--height', type=int, default=768, help='Frame height (px)')
    render_parser.add_argument('--centre', type=float, nargs=2, metavar=('LAT', 'LON'),
                               help='View centre (default: fit all routes)')
    render_parser.add_argument('--scale', type=float, help='Pixels per degree of latitude')
    render_parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    # Decode command
    decode_parser = subparsers.add_parser('decode', help='Print the nodes of a plot command')
    decode_parser.add_argument('command', help='Plot command, with or without ".plot"')
    decode_parser.add_argument('--navdata', help='Navigation data YAML file')
    decode_parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    args = parser.parse_args(argv)

    if not args.command_name:
        parser.print_help()
        return 1

    configure_logging(args.verbose)

    commands = {
        'render': cmd_render,
        'decode': cmd_decode,
    }

    return commands[args.command_name](args)


if __name__ == '__main__':
    sys.exit(main())
