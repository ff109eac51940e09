"""
urlencode - Escaping Decision Table
====================================
Decides, per byte and per URL component, whether the byte has to be
percent-escaped. Section numbers refer to RFC 3986.
"""

from typing import Union

from .mode import Mode

# §3.2.2 sub-delims, plus ':' for host:port, '[' ']' for [ipv6]:port and
# '<' '>' '"' which hosts can't carry %-encoded either.
HOST_ALLOWED = frozenset(b"!$&'()*+,;=:[]<>\"")

# §2.3 Unreserved characters (mark)
UNRESERVED_MARKS = frozenset(b"-_.~")

# §2.2 Reserved characters (reserved)
RESERVED = frozenset(b"$&+,/:;=?@")

# Reserved characters each component still has to escape.
RESERVED_ESCAPED = {
    # §3.3, the path is handled as a whole so only '?' is special
    Mode.PATH: frozenset(b"?"),
    # §3.3, '/' ';' ',' carry meaning between segments
    Mode.PATH_SEGMENT: frozenset(b"/;,?"),
    # §3.2.1, plus ':' which splits user from password
    Mode.USER_PASSWORD: frozenset(b"@/?:"),
    # §3.4
    Mode.QUERY_COMPONENT: RESERVED,
    # §4.1
    Mode.FRAGMENT: frozenset(),
}

# Sub-delims left alone in fragments. Single quote stays escaped.
FRAGMENT_ALLOWED = frozenset(b"!()*")


def _is_alnum(c: int) -> bool:
    return (
        0x61 <= c <= 0x7A  # a-z
        or 0x41 <= c <= 0x5A  # A-Z
        or 0x30 <= c <= 0x39  # 0-9
    )


def should_escape(c: Union[int, bytes, str], mode: Mode) -> bool:
    """
    Report whether a byte must be percent-escaped in the given component.

    Args:
        c: The byte value, or a length-1 bytes/str
        mode: URL component the byte belongs to

    Returns:
        True if the byte has to be written as %XX
    """
    if not isinstance(c, int):
        c = ord(c)

    if _is_alnum(c):
        return False

    if mode in (Mode.HOST, Mode.ZONE) and c in HOST_ALLOWED:
        return False

    if c in UNRESERVED_MARKS:
        return False

    if c in RESERVED and mode in RESERVED_ESCAPED:
        return c in RESERVED_ESCAPED[mode]

    if mode is Mode.FRAGMENT and c in FRAGMENT_ALLOWED:
        return False

    # Everything else must be escaped.
    return True
