"""Route progress colouring.

Routes are shaded along their length so direction of flight can be read at
a glance: blue at the first node, magenta half way, red at the last.
"""

from typing import Tuple

RGB = Tuple[int, int, int]


def progress_color(t: float) -> RGB:
    """
    Map route progress to a colour on the blue-magenta-red ramp.

    Args:
        t: Fractional position along the route, 0.0 to 1.0

    Returns:
        (r, g, b) tuple, 0-255
    """
    x = int(255.0 * (1.0 - abs(1.0 - t * 2.0)))
    return (
        255 if t >= 0.5 else x,
        0,
        255 if t <= 0.5 else x,
    )


def progress(index: int, count: int) -> float:
    """Fractional position of node ``index`` in a route of ``count`` nodes."""
    if count <= 1:
        return 0.0
    return index / (count - 1)


def to_hex(color: RGB) -> str:
    r, g, b = color
    return f"#{r:02x}{g:02x}{b:02x}"


def from_hex(text: str) -> RGB:
    """Parse ``#rrggbb`` into an RGB tuple."""
    value = text.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Invalid colour: {text!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))
