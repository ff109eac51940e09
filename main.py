#!/usr/bin/env python3
"""
urlencode v1.0 - URL Percent-Encoding Filter
=============================================
Encodes or decodes each line of input (or the whole input) for one URL
component and writes the result to stdout.

Features:
- Seven URL components: path segment, path, query, host, zone, userinfo, fragment
- Strict decoding with host and zone checks
- Line-by-line or whole-input processing
- Optional colored highlighting of escaped bytes

License: MIT
Version: 1.0.0
"""

import argparse
import logging
import sys
from typing import Any, BinaryIO, Dict, Optional, TextIO

from urlcodec import __version__
from urlcodec.codec import decode, encode
from urlcodec.help import encodings_message, usage_message
from urlcodec.mode import Mode
from urlcodec.reader import iter_units
from urlcodec.utils import Colors, DEFAULT_CONFIG_PATH, load_config, setup_logging
from urlcodec.highlight import Highlighter

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_CODEC = 2
EXIT_IO = 2
EXIT_OPEN = 3
EXIT_INTERRUPTED = 130


class URLEncode:
    """Runs the engine over every input unit."""

    VERSION = __version__

    def __init__(
        self,
        args: argparse.Namespace,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
        stderr: Optional[TextIO] = None
    ):
        self.args = args
        self.stdin = stdin or sys.stdin.buffer
        self.stdout = stdout or sys.stdout.buffer
        self.stderr = stderr or sys.stderr
        self.config = self._load_configuration()

        color = self._setting(args.color, "output", "color")
        self.colors = Colors(enabled=Colors.wanted(color, self.stdout))
        self.logger = self._setup_logger(Colors(enabled=Colors.wanted(color, self.stderr)))

        self.encoding = self._setting(args.encoding, "codec", "encoding")
        self.decoding = bool(self._setting(args.decode, "codec", "decode"))
        self.whole = bool(self._setting(args.all, "input", "all"))
        self.units = 0

    def _load_configuration(self) -> Dict[str, Any]:
        """Load configuration from urlencode.yaml or use defaults."""
        config_path = self.args.config or DEFAULT_CONFIG_PATH
        return load_config(config_path)

    def _setup_logger(self, colors: Colors) -> logging.Logger:
        return setup_logging(
            log_file=self.args.log_file,
            verbose=self.args.verbose,
            quiet=self.args.quiet,
            colors=colors,
            stream=self.stderr
        )

    def _setting(self, flag: Any, section: str, key: str) -> Any:
        """Command-line value if given, else the configured one."""
        if flag is not None:
            return flag
        return self.config.get(section, {}).get(key)

    def run(self) -> int:
        """Main execution pipeline."""
        if len(self.args.files) > 1:
            self.logger.error("must only supply up to one file name argument")
            return EXIT_USAGE

        try:
            mode = Mode.from_code(self.encoding)
        except ValueError as e:
            self.logger.error(str(e))
            self.stderr.write(encodings_message(Colors(enabled=False)))
            return EXIT_USAGE

        self.logger.debug(
            f"Mode: {mode}, decode: {self.decoding}, whole input: {self.whole}"
        )

        if not self.args.files:
            return self._process(self.stdin, mode)

        path = self.args.files[0]
        try:
            stream = open(path, "rb")
        except OSError as e:
            self.logger.error(f"open {path}: {e.strerror or e}")
            return EXIT_OPEN

        with stream:
            self.logger.info(f"Reading from {path}")
            return self._process(stream, mode)

    def _build_highlighter(self, mode: Mode) -> Optional[Highlighter]:
        if not self.colors.enabled:
            return None
        output = self.config.get("output", {})
        return Highlighter(
            mode,
            decoding=self.decoding,
            colors=self.colors,
            escaped_color=output.get("escaped_color", "magenta"),
            unescaped_color=output.get("unescaped_color", "red")
        )

    def _process(self, stream: BinaryIO, mode: Mode) -> int:
        """Encode or decode each unit of the stream, stopping at the first error."""
        highlight = self._build_highlighter(mode)
        units = iter_units(stream, whole=self.whole)

        while True:
            try:
                unit = next(units, None)
            except OSError as e:
                self.logger.error(f"Failed to read input: {e}")
                return EXIT_IO
            if unit is None:
                break

            if self.decoding:
                result = decode(unit, mode)
                if not result.ok:
                    self._flush()
                    self.logger.error(str(result.error))
                    return EXIT_CODEC
                output = result.value
            else:
                output = encode(unit, mode)

            if highlight is not None:
                output = highlight(unit, output)
            try:
                self.stdout.write(output + b"\n")
            except OSError as e:
                self.logger.error(f"Failed to write output: {e}")
                return EXIT_IO
            self.units += 1

        try:
            self.stdout.flush()
        except OSError as e:
            self.logger.error(f"Failed to write output: {e}")
            return EXIT_IO

        self.logger.info(f"Processed {self.units} unit(s)")
        return EXIT_OK

    def _flush(self):
        try:
            self.stdout.flush()
        except OSError as e:
            self.logger.debug(f"Failed to flush output: {e}")


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="urlencode",
        description=usage_message("urlencode"),
        epilog=encodings_message(),
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "files",
        nargs="*",
        metavar="file",
        help="Read from this file instead of STDIN"
    )

    # Encoding
    codec_group = parser.add_argument_group("Encoding")
    codec_group.add_argument(
        "-e", "--encoding",
        help="Encode/decode format, see below (default: path-segment)"
    )
    codec_group.add_argument(
        "-d", "--decode",
        action=argparse.BooleanOptionalAction,
        help="Decodes, instead of encodes (--no-decode overrides the config file)"
    )
    codec_group.add_argument(
        "-a", "--all",
        action=argparse.BooleanOptionalAction,
        help="Use all input at once, instead of line-by-line (--no-all reads by line)"
    )

    # Output and logging
    output_group = parser.add_argument_group("Output and Logging")
    output_group.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        help="Highlight escaped bytes (default: auto)"
    )
    output_group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Verbose logging on stderr (use -vv for debug)"
    )
    output_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress log messages, including errors"
    )
    output_group.add_argument(
        "--log-file",
        help="Also write debug logs to this file"
    )

    # Configuration
    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument(
        "-c", "--config",
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv=None, stdin=None, stdout=None, stderr=None) -> int:
    """Entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    tool = URLEncode(args, stdin=stdin, stdout=stdout, stderr=stderr)
    return tool.run()


def cli():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n[!] Interrupted by user", file=sys.stderr)
        sys.exit(EXIT_INTERRUPTED)


if __name__ == "__main__":
    cli()
