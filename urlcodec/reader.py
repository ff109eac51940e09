"""
urlencode - Input Scanning
===========================
Splits an input stream into the units that get encoded or decoded.
"""

from typing import BinaryIO, Iterator


def iter_lines(stream: BinaryIO) -> Iterator[bytes]:
    """Yield each line without its line ending ("\\n" or "\\r\\n")."""
    for line in stream:
        if line.endswith(b"\n"):
            line = line[:-1]
        if line.endswith(b"\r"):
            line = line[:-1]
        yield line


def iter_whole(stream: BinaryIO) -> Iterator[bytes]:
    """Yield the entire input as a single unit, line endings included."""
    yield stream.read()


def iter_units(stream: BinaryIO, whole: bool = False) -> Iterator[bytes]:
    """
    Iterate over input units.

    Args:
        stream: Binary stream to read from
        whole: Treat all input as one unit instead of one unit per line

    Returns:
        Iterator of raw byte units
    """
    if whole:
        return iter_whole(stream)
    return iter_lines(stream)
