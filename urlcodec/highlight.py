"""
urlencode - Output Highlighting
================================
Colors the parts of a unit that the engine escaped or unescaped. Applied
to the engine's plain result; the codec never sees colors.
"""

import re

from .codec import PERCENT, PLUS, SPACE, unhex
from .mode import Mode
from .utils import Colors

ESCAPED_RUN = re.compile(rb"(?:%[0-9A-F]{2})+")
ESCAPED_QUERY_RUN = re.compile(rb"(?:%[0-9A-F]{2}|\+)+")


class Highlighter:
    """Highlight escape sequences in encoded output and their bytes in decoded output."""

    def __init__(
        self,
        mode: Mode,
        decoding: bool = False,
        colors: Colors = None,
        escaped_color: str = "magenta",
        unescaped_color: str = "red"
    ):
        self.mode = mode
        self.decoding = decoding
        self.colors = colors or Colors()
        self.escaped_color = escaped_color
        self.unescaped_color = unescaped_color

    def __call__(self, source: bytes, output: bytes) -> bytes:
        """
        Highlight one unit.

        Args:
            source: The unit as read from input
            output: The engine's result for that unit

        Returns:
            Output with escaped (or unescaped) runs colored
        """
        if self.decoding:
            return self._highlight_decoded(source)
        return self._highlight_encoded(output)

    def _highlight_encoded(self, output: bytes) -> bytes:
        # Query mode escapes a literal '+', so any '+' left came from a space.
        pattern = ESCAPED_QUERY_RUN if self.mode is Mode.QUERY_COMPONENT else ESCAPED_RUN
        return pattern.sub(
            lambda m: self.colors.paint_bytes(m.group(0), self.escaped_color),
            output
        )

    def _highlight_decoded(self, source: bytes) -> bytes:
        # Runs are wrapped as a whole so multi-byte characters stay intact.
        result = bytearray()
        run = bytearray()
        i = 0
        while i < len(source):
            c = source[i]
            if c == PERCENT:
                run.append(unhex(source[i + 1]) << 4 | unhex(source[i + 2]))
                i += 3
                continue
            if c == PLUS and self.mode is Mode.QUERY_COMPONENT:
                run.append(SPACE)
            else:
                if run:
                    result += self.colors.paint_bytes(bytes(run), self.unescaped_color)
                    run.clear()
                result.append(c)
            i += 1
        if run:
            result += self.colors.paint_bytes(bytes(run), self.unescaped_color)
        return bytes(result)
