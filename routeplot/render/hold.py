"""
Hold geometry.

Turns a hold attached to a fix into a racetrack outline in screen space.
The inbound leg is projected from real geography; the turns are drawn at a
roughly constant on-screen radius so short and long holds stay legible at
any zoom.
"""

import math
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from ..route.model import Hold
from .colors import RGB
from .surface import Canvas, PixelPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HoldOutline:
    """Racetrack outline of a hold in pixels.

    The inbound leg runs from ``inbound_start`` to the fix
    (``inbound_end``). The outbound leg runs parallel to it, offset by twice
    the perpendicular, from ``outbound_start`` (abeam the fix) to
    ``outbound_end``.
    """
    inbound_start: PixelPoint
    inbound_end: PixelPoint
    outbound_start: PixelPoint
    outbound_end: PixelPoint
    near_turn_centre: PixelPoint  # Turn after passing the fix
    far_turn_centre: PixelPoint   # Turn onto the inbound leg
    perpendicular: PixelPoint
    radius: float
    start_angle: float  # Degrees


def hold_reference_position(
    lat: float, lon: float, hold: Hold, nm_per_deg_lat: float = 60.007,
) -> Tuple[float, float]:
    """
    Position ``hold.length`` nm from the fix along the reciprocal of the
    inbound course (flat-earth approximation).

    Returns:
        (lat, lon) of the start of the inbound leg
    """
    crs_rad = math.radians(hold.course)
    lat_rad = math.radians(lat)
    len_deg = hold.length / nm_per_deg_lat

    return (
        lat - len_deg * math.cos(crs_rad),
        lon - len_deg * math.sin(crs_rad) / math.cos(lat_rad),
    )


def arc_start_angle(rad_x: float, rad_y: float) -> float:
    """
    Start angle (degrees) of the turn arcs for a perpendicular vector.

    ``atan(y/x)`` is only defined over half a turn; the quadrant test below
    adds 180 degrees where the raw value would point the arc the wrong way.
    """
    if rad_x == 0:
        ang = math.copysign(90.0, rad_y)
    else:
        ang = math.degrees(math.atan(rad_y / rad_x))

    if (
        (rad_x <= rad_y and rad_x <= -rad_y) or
        (rad_x < rad_y and rad_x > -rad_y and ang < 0) or
        (rad_x > rad_y and rad_x < -rad_y and ang > 0)
    ):
        ang += 180

    return ang


def compute_hold_outline(
    fix: PixelPoint,
    reference: PixelPoint,
    hold: Hold,
    turn_radius: float = 2.0,
) -> Optional[HoldOutline]:
    """
    Compute the racetrack outline of a hold.

    Args:
        fix: Projected position of the holding fix
        reference: Projected position of the start of the inbound leg
        hold: Hold descriptor (length sets the radius scale, turn direction
            sets the side)
        turn_radius: Turn radius factor; the perpendicular is the inbound leg
            scaled by ``turn_radius / hold.length``

    Returns:
        HoldOutline, or None if the hold has no usable length on screen
    """
    if hold.length <= 0:
        logger.debug(f"Skipping hold with non-positive length {hold.length}")
        return None

    leg = reference - fix
    if leg.x == 0 and leg.y == 0:
        return None

    mul = turn_radius / hold.length
    rad = PixelPoint(leg.y * mul, -leg.x * mul)

    start_angle = arc_start_angle(rad.x, rad.y)

    if hold.left_turns:
        rad = rad.scaled(-1)

    return HoldOutline(
        inbound_start=reference,
        inbound_end=fix,
        outbound_start=fix + rad.scaled(2),
        outbound_end=reference + rad.scaled(2),
        near_turn_centre=fix + rad,
        far_turn_centre=reference + rad,
        perpendicular=rad,
        radius=math.hypot(rad.x, rad.y),
        start_angle=start_angle,
    )


def draw_hold(canvas: Canvas, outline: HoldOutline, color: RGB, width: float = 1.0):
    """Draw both turns and both legs of a hold outline."""
    canvas.draw_arc(outline.near_turn_centre, outline.radius, outline.start_angle, -180, color, width)
    canvas.draw_line(outline.outbound_start, outline.outbound_end, color, width)
    canvas.draw_arc(outline.far_turn_centre, outline.radius, outline.start_angle, 180, color, width)
    canvas.draw_line(outline.inbound_start, outline.inbound_end, color, width)
