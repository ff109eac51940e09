"""
urlencode Codec Package
=======================
Percent-encoding and decoding of URL components: the per-mode escaping
table, the encode/decode engine and the pieces the command line needs
around it.
"""

from .mode import Mode
from .escape import should_escape
from .codec import encode, decode, DecodeError, DecodeResult, ErrorKind
from .reader import iter_units
from .help import encodings_message, usage_message
from .highlight import Highlighter
from .utils import Colors, setup_logging, load_config

__all__ = [
    "Mode",
    "should_escape",
    "encode",
    "decode",
    "DecodeError",
    "DecodeResult",
    "ErrorKind",
    "iter_units",
    "encodings_message",
    "usage_message",
    "Highlighter",
    "Colors",
    "setup_logging",
    "load_config",
]

__version__ = "1.0.0"
