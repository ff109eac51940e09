"""
urlencode - Utility Functions
==============================
Terminal colors, logging setup and configuration loading.
"""

import logging
import os
import sys
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, TextIO


class Colors:
    """ANSI color codes for terminal output."""
    CODES = {
        'reset': '\033[0m',
        'black': '\033[30m',
        'red': '\033[31m',
        'green': '\033[32m',
        'yellow': '\033[33m',
        'blue': '\033[34m',
        'magenta': '\033[35m',
        'cyan': '\033[36m',
        'white': '\033[37m',
        'gray': '\033[90m',
        'bold': '\033[1m',
        'dim': '\033[2m',
        'italic': '\033[3m',
    }

    def __init__(self, enabled: bool = True):
        self.enabled = enabled

    def code(self, name: str) -> str:
        """Escape sequence for a color name, empty when colors are off."""
        if not self.enabled:
            return ''
        try:
            return self.CODES[name]
        except KeyError:
            raise ValueError(f"Unknown color: {name!r}") from None

    def paint(self, text: str, name: str) -> str:
        """Wrap text in a color."""
        if not self.enabled or not text:
            return text
        return f"{self.code(name)}{text}{self.CODES['reset']}"

    def paint_bytes(self, data: bytes, name: str) -> bytes:
        if not self.enabled or not data:
            return data
        return self.code(name).encode('ascii') + data + self.CODES['reset'].encode('ascii')

    @staticmethod
    def wanted(mode: str, stream: TextIO) -> bool:
        """
        Resolve a --color setting against the output stream.

        Args:
            mode: "always", "never" or "auto"
            stream: Stream the colored output goes to

        Returns:
            True if output should be colored
        """
        if mode == 'always':
            return True
        if mode == 'never':
            return False
        if os.environ.get('NO_COLOR'):
            return False
        isatty = getattr(stream, 'isatty', None)
        return bool(isatty and isatty())


def setup_logging(
    log_file: Optional[str] = None,
    verbose: int = 0,
    quiet: bool = False,
    colors: Optional[Colors] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Setup logging configuration.

    Args:
        log_file: Path to log file, if any
        verbose: Verbosity level (0-2)
        quiet: Suppress console output
        colors: Palette for the console prefix
        stream: Console stream (default: stderr, stdout carries data)

    Returns:
        Configured logger instance
    """
    colors = colors or Colors(enabled=False)
    logger = logging.getLogger("urlencode")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []  # Clear existing handlers

    # File handler - always log everything
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    # Console handler
    if not quiet:
        console_handler = logging.StreamHandler(stream or sys.stderr)

        if verbose >= 2:
            console_handler.setLevel(logging.DEBUG)
        elif verbose >= 1:
            console_handler.setLevel(logging.INFO)
        else:
            console_handler.setLevel(logging.WARNING)

        console_format = logging.Formatter(
            f"{colors.paint('%(name)s:', 'red')} {colors.paint('%(levelname)s:', 'bold')} %(message)s"
        )
        console_handler.setFormatter(console_format)
        logger.addHandler(console_handler)
    else:
        logger.addHandler(logging.NullHandler())

    return logger


DEFAULT_CONFIG_PATH = "urlencode.yaml"


def default_config() -> Dict[str, Any]:
    return {
        "codec": {
            "encoding": "path-segment",
            "decode": False,
        },
        "input": {
            "all": False,
        },
        "output": {
            "color": "auto",
            "escaped_color": "magenta",
            "unescaped_color": "red",
        },
    }


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            merge_dicts(base[key], value)
        else:
            base[key] = value
    return base


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file

    Returns:
        Configuration dictionary
    """
    config = default_config()

    path = Path(config_path)
    if path.exists():
        try:
            with open(path, 'r') as f:
                user_config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            print(f"Warning: Could not load config file: {e}", file=sys.stderr)
            return config
        if isinstance(user_config, dict):
            return merge_dicts(config, user_config)
        if user_config is not None:
            print(f"Warning: Ignoring config file {path}: expected a mapping", file=sys.stderr)

    return config
