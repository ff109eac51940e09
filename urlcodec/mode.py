"""
urlencode - Encoding Modes
===========================
The URL components a value can be escaped for, and the selector that maps
command-line codes onto them.
"""

from enum import Enum


class Mode(Enum):
    """Interpretation context for escaping and unescaping."""

    PATH_SEGMENT = ("s", "path-segment")
    PATH = ("p", "path")
    QUERY_COMPONENT = ("q", "query")
    HOST = ("h", "host")
    ZONE = ("z", "zone")
    USER_PASSWORD = ("c", "cred")
    FRAGMENT = ("f", "frag")

    def __init__(self, code: str, long_name: str):
        self.code = code
        self.long_name = long_name

    @classmethod
    def from_code(cls, name: str) -> "Mode":
        """
        Look up a mode by its short code or long name.

        Args:
            name: Code as given on the command line (e.g. "q" or "query")

        Returns:
            The matching Mode

        Raises:
            ValueError: If no mode uses that name
        """
        for mode in cls:
            if name in (mode.code, mode.long_name):
                return mode
        raise ValueError(f"invalid encoding: {name!r}")

    def __str__(self) -> str:
        return self.long_name
