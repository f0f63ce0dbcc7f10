"""
Coordinate String Source

Decodes the legacy compact coordinate format. Each position is a 7-character
base-62 word, optionally followed by one or two characters of extra data
(highlight flag or hold), with ``-`` for line breaks and ``(...)`` for
labels on the preceding position.
"""

import logging
from typing import List, Optional

from ..route.model import Discontinuity, Hold, Route, Waypoint
from .base import ParseError, ParseResult, Source

logger = logging.getLogger(__name__)

WORD_LENGTH = 7
HIGHLIGHT_THRESHOLD = 60


def decode_char(c: str) -> int:
    """Decode one base-62 character, returning -1 if it is not in the alphabet."""
    if "A" <= c <= "Z":
        return ord(c) - ord("A")
    if "a" <= c <= "z":
        return 26 + ord(c) - ord("a")
    if "0" <= c <= "9":
        return 52 + ord(c) - ord("0")
    return -1


def decode_word(word: List[int]) -> Waypoint:
    """
    Build a waypoint from a decoded 7-value word.

    Word layout:
        w0: flags. bit 0 extra data, bit 1 south, bit 2 lat +60,
            bit 3 west, bits 4-5 lon +60 * value
        w1..w3: latitude degrees, minutes, seconds
        w4..w6: longitude degrees, minutes, seconds
    """
    flags = word[0]

    lat = word[1] + (word[2] + word[3] / 60) / 60
    lon = word[4] + (word[5] + word[6] / 60) / 60

    lat += 60.0 * ((flags >> 2) & 0b01)
    lon += 60.0 * ((flags >> 4) & 0b11)

    if flags & 0b0010:
        lat = -lat
    if flags & 0b1000:
        lon = -lon

    return Waypoint(lat, lon)


def decode_hold(extra1: int, extra2: int) -> Hold:
    """Decode the two extra characters of a hold: 6 degree course steps plus a 3 degree half step."""
    return Hold(
        length=float(extra2 & 0b1111),
        course=6.0 * extra1 + (3.0 if (extra2 >> 5) else 0.0),
        left_turns=((extra2 >> 4) & 1) == 1,
    )


class CoordsSource(Source):
    """Plot a string of coordinates encoded in the legacy format."""

    kind = "coords"
    help_arguments = "<STRING>"
    help_description = "Plot a string of coordinates, encoded in the legacy format"

    def parse(self, args: List[str], text: str) -> ParseResult:
        if not args or not text:
            raise ParseError("missing string")

        name: Optional[str] = None
        if len(args) > 1 and "(" not in args[0]:
            name = args[0]
            text = text[len(args[0]):].lstrip(" ")

        route = self.decode(text)
        logger.debug(f"Decoded {len(route)} nodes from coordinate string")
        return ParseResult(route=route, name=name)

    def decode(self, text: str) -> Route:
        """
        Decode an encoded coordinate string.

        Args:
            text: Encoded string, optionally starting with an ``@`` marker

        Returns:
            Decoded nodes in encounter order

        Raises:
            ParseError: On any undecodable character or unbalanced label bracket
        """
        route: Route = []
        pos = 1 if text.startswith("@") else 0
        end = len(text)

        while pos < end:
            c = text[pos]

            if c == "(" and route:
                close = self._find_closing_bracket(text, pos)
                label = text[pos + 1:close]
                # Labels on a discontinuity are dropped
                last = route[-1]
                if isinstance(last, Waypoint):
                    last.label = label
                pos = close + 1
                continue

            if c == "-":
                route.append(Discontinuity())
                pos += 1
                continue

            first = decode_char(c)
            if first < 0:
                raise ParseError("invalid structural character")

            word = [first]
            for i in range(1, WORD_LENGTH):
                word.append(self._decode_at(text, pos + i))
            pos += WORD_LENGTH

            node = decode_word(word)

            if first & 1:
                extra1 = self._decode_at(text, pos)
                pos += 1
                if extra1 >= HIGHLIGHT_THRESHOLD:
                    node.highlight = True
                else:
                    extra2 = self._decode_at(text, pos)
                    pos += 1
                    node.hold = decode_hold(extra1, extra2)

            route.append(node)

        return route

    @staticmethod
    def _decode_at(text: str, pos: int) -> int:
        value = decode_char(text[pos]) if pos < len(text) else -1
        if value < 0:
            raise ParseError("invalid character")
        return value

    @staticmethod
    def _find_closing_bracket(text: str, start: int) -> int:
        """Return the index of the ``)`` balancing the ``(`` at ``start``."""
        depth = 0
        for i in range(start, len(text)):
            if text[i] == "(":
                depth += 1
            elif text[i] == ")":
                depth -= 1
                if depth == 0:
                    return i
        raise ParseError("missing closing bracket")
