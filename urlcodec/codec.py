"""
urlencode - Encode/Decode Engine
=================================
Percent-encodes and decodes values for a single URL component.

Both functions accept bytes or str and hand back the same type. A str is
processed as UTF-8 with the surrogateescape handler, so any byte sequence
survives a decode/encode round trip.
"""

from dataclasses import dataclass
from enum import Enum
from typing import AnyStr, Optional, Tuple, Union

from .escape import should_escape
from .mode import Mode

UPPER_HEX = b"0123456789ABCDEF"

PERCENT = 0x25
PLUS = 0x2B
SPACE = 0x20

# RFC 6874 lets "%25" stand for the '%' of an IPv6 zone delimiter.
ESCAPED_PERCENT = b"%25"


def is_hex(c: int) -> bool:
    return (
        0x30 <= c <= 0x39  # 0-9
        or 0x61 <= c <= 0x66  # a-f
        or 0x41 <= c <= 0x46  # A-F
    )


def unhex(c: int) -> int:
    if 0x30 <= c <= 0x39:
        return c - 0x30
    if 0x61 <= c <= 0x66:
        return c - 0x61 + 10
    if 0x41 <= c <= 0x46:
        return c - 0x41 + 10
    return 0


class ErrorKind(Enum):
    MALFORMED_ESCAPE = "malformed_escape"
    INVALID_HOST_BYTE = "invalid_host_byte"


@dataclass(frozen=True)
class DecodeError:
    """Why a value could not be decoded, with the offending bytes."""
    kind: ErrorKind
    fragment: bytes

    def __str__(self) -> str:
        quoted = '"%s"' % self.fragment.decode("ascii", errors="backslashreplace")
        if self.kind is ErrorKind.INVALID_HOST_BYTE:
            return f"invalid character {quoted} in host name"
        return f"invalid URL escape {quoted}"


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of decode(): either a value or the first error found."""
    value: Optional[Union[bytes, str]] = None
    error: Optional[DecodeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _as_bytes(s: AnyStr) -> Tuple[bytes, bool]:
    if isinstance(s, str):
        return s.encode("utf-8", errors="surrogateescape"), True
    return bytes(s), False


def _restore(data: bytes, was_text: bool) -> AnyStr:
    if was_text:
        return data.decode("utf-8", errors="surrogateescape")
    return data


def encode(s: AnyStr, mode: Mode) -> AnyStr:
    """
    Percent-encode a value for the given URL component.

    Args:
        s: Value to encode
        mode: URL component the value is meant for

    Returns:
        The encoded value; the input object itself if nothing needed escaping
    """
    data, was_text = _as_bytes(s)

    space_count, hex_count = 0, 0
    for c in data:
        if should_escape(c, mode):
            if c == SPACE and mode is Mode.QUERY_COMPONENT:
                space_count += 1
            else:
                hex_count += 1

    if space_count == 0 and hex_count == 0:
        return s

    out = bytearray()
    for c in data:
        if c == SPACE and mode is Mode.QUERY_COMPONENT:
            out.append(PLUS)
        elif should_escape(c, mode):
            out.append(PERCENT)
            out.append(UPPER_HEX[c >> 4])
            out.append(UPPER_HEX[c & 15])
        else:
            out.append(c)
    return _restore(bytes(out), was_text)


def _validate(data: bytes, mode: Mode) -> Tuple[Optional[DecodeError], int, bool]:
    """
    Check every escape and raw byte before anything is decoded.

    Returns:
        (first error or None, number of escapes, whether a '+' means space)
    """
    n = 0
    has_plus = False
    i = 0
    while i < len(data):
        c = data[i]
        if c == PERCENT:
            n += 1
            if i + 2 >= len(data) or not is_hex(data[i + 1]) or not is_hex(data[i + 2]):
                return DecodeError(ErrorKind.MALFORMED_ESCAPE, data[i:i + 3]), n, has_plus
            sequence = data[i:i + 3]
            value = unhex(data[i + 1]) << 4 | unhex(data[i + 2])
            # RFC 3986 §3.2.2 only allows %-encoding for non-ASCII host bytes,
            # i.e. a leading hex digit of 8 or above.
            if mode is Mode.HOST and unhex(data[i + 1]) < 8 and sequence != ESCAPED_PERCENT:
                return DecodeError(ErrorKind.MALFORMED_ESCAPE, sequence), n, has_plus
            # Zone escapes may only stand for bytes a host could carry anyway.
            # Windows puts spaces in interface names, so those pass too.
            if mode is Mode.ZONE:
                if (
                    sequence != ESCAPED_PERCENT
                    and value != SPACE
                    and should_escape(value, Mode.HOST)
                ):
                    return DecodeError(ErrorKind.MALFORMED_ESCAPE, sequence), n, has_plus
            i += 3
        elif c == PLUS:
            has_plus = has_plus or mode is Mode.QUERY_COMPONENT
            i += 1
        else:
            if mode in (Mode.HOST, Mode.ZONE) and c < 0x80 and should_escape(c, mode):
                return DecodeError(ErrorKind.INVALID_HOST_BYTE, data[i:i + 1]), n, has_plus
            i += 1
    return None, n, has_plus


def decode(s: AnyStr, mode: Mode) -> DecodeResult:
    """
    Decode a percent-encoded value for the given URL component.

    The whole value is validated first; on failure no partial output is
    produced and the first violation is returned.

    Args:
        s: Value to decode
        mode: URL component the value came from

    Returns:
        DecodeResult with either the decoded value or the error
    """
    data, was_text = _as_bytes(s)

    error, n, has_plus = _validate(data, mode)
    if error is not None:
        return DecodeResult(error=error)

    if n == 0 and not has_plus:
        return DecodeResult(value=s)

    out = bytearray()
    i = 0
    while i < len(data):
        c = data[i]
        if c == PERCENT:
            out.append(unhex(data[i + 1]) << 4 | unhex(data[i + 2]))
            i += 3
            continue
        if c == PLUS and mode is Mode.QUERY_COMPONENT:
            out.append(SPACE)
        else:
            out.append(c)
        i += 1
    return DecodeResult(value=_restore(bytes(out), was_text))
