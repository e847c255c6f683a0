"""
SpOnGiFy - Command Line Interface
=================================
Argument parsing and the read / transform / write loop.

Exit codes:
    0   success
    1   I/O failure (unreadable input, unwritable output, no clipboard)
    2   malformed arguments
    130 interrupted
"""

import argparse
import random
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from .alternator import Advance, CaseAlternator, spongify, spongify_lines
from .exceptions import SpongifyError
from .io import FileSource, InputSource, resolve_input, resolve_output
from .styles import NAMED_STYLES, Style, StyleError
from .utils import Colors, load_config, setup_logging, validate_config

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


class Spongify:
    """Runs one invocation: resolve input and output, then stream lines through."""

    def __init__(self, args: argparse.Namespace, config: Optional[Dict[str, Any]] = None):
        self.args = args
        self.logger = setup_logging(
            log_file=args.log_file,
            verbose=args.verbose,
            quiet=args.quiet
        )
        if config is not None:
            self.config = validate_config(dict(config))
        else:
            self.config = load_config(args.config)

    def _style(self) -> Style:
        style = self.args.style if self.args.style is not None else self.config["style"]
        return Style.parse(style)

    def _reset_per_line(self) -> bool:
        if self.args.continuous:
            return False
        return bool(self.config["reset_per_line"])

    def _advance(self) -> Advance:
        return Advance(self.args.advance or self.config["advance"])

    def _overwrites_input(self, source: InputSource) -> bool:
        """True when --output-file would truncate the file being read."""
        if not self.args.output_file or not isinstance(source, FileSource):
            return False
        return source.path.resolve() == Path(self.args.output_file).resolve()

    def _rng(self) -> random.Random:
        seed = self.args.seed if self.args.seed is not None else self.config["seed"]
        return random.Random(seed)

    def list_styles(self) -> int:
        sample = "like this"
        for name, description in NAMED_STYLES.items():
            rendered = spongify(sample, Style.parse(name), rng=random.Random(0))
            print(f"{name:<12} {rendered:<10} {description}")
        return EXIT_OK

    def run(self) -> int:
        """Main execution pipeline."""
        if self.args.list_styles:
            return self.list_styles()

        try:
            style = self._style()
        except StyleError as e:
            self.logger.error(f"Invalid style: {e}")
            return EXIT_USAGE

        encoding = self.config["encoding"]
        source = resolve_input(
            inline=self.args.inline,
            text=self.args.text,
            file=self.args.file,
            stdin=self.args.stdin,
            encoding=encoding
        )
        if self._overwrites_input(source):
            self.logger.error("Output file is the same as the input file")
            return EXIT_USAGE

        alternator = CaseAlternator(style, rng=self._rng(), advance=self._advance())
        reset_per_line = self._reset_per_line()

        self.logger.info(f"Style: {style} ({style.kind.value})")
        self.logger.info(f"Input: {source.description}")
        self.logger.debug(f"Reset cursor per line: {reset_per_line}")

        count = 0
        try:
            with resolve_output(
                output_file=self.args.output_file,
                clip=self.args.clip,
                separator=self.config["clipboard_separator"],
                encoding=encoding
            ) as sink:
                self.logger.info(f"Output: {sink.description}")
                for line in spongify_lines(source, alternator, reset_per_line=reset_per_line):
                    sink.write_line(line)
                    count += 1
        except SpongifyError as e:
            self.logger.error(f"Fatal error: {e}", exc_info=self.args.verbose >= 2)
            return EXIT_IO_ERROR
        except BrokenPipeError:
            self.logger.debug("Output closed early")
            _silence_stdout()
            return EXIT_IO_ERROR
        except KeyboardInterrupt:
            self.logger.warning("Interrupted by user.")
            return EXIT_INTERRUPTED

        self.logger.debug(f"Processed {count} line(s)")
        return EXIT_OK


def _silence_stdout():
    # Python flushes stdout again at exit; with the reader gone that would
    # print a second BrokenPipeError.
    try:
        sys.stdout.close()
    except OSError:
        pass


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="spongify",
        description="Rewrite text LiKe ThIs by alternating the case of its letters",
        epilog="""
Examples:
  %(prog)s "your text here"
  %(prog)s --style "LiKe ThIs" "your text here"
  %(prog)s --style random -c "copied straight to the clipboard"
  nc -l 9000 | %(prog)s -
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    input_group = parser.add_argument_group("Input")
    input_group.add_argument(
        "inline",
        nargs="?",
        metavar="TEXT",
        help="Text to transform; '-' reads standard input and the name of an "
             "existing file reads that file. Use --text or --file to be explicit."
    )
    sources = input_group.add_mutually_exclusive_group()
    sources.add_argument(
        "--text",
        help="Literal text to transform, even if it is '-' or names a file"
    )
    sources.add_argument(
        "-f", "--file",
        help="Read text from a file"
    )
    sources.add_argument(
        "--stdin",
        action="store_true",
        help="Read text from standard input"
    )

    style_group = parser.add_argument_group("Style")
    style_group.add_argument(
        "-s", "--style",
        help="'alternating', 'random', or a reference whose case pattern is "
             "copied, e.g. \"lIkE tHiS\" (default: alternating)"
    )
    style_group.add_argument(
        "--continuous",
        action="store_true",
        help="Carry the alternation across lines instead of restarting each line"
    )
    style_group.add_argument(
        "--advance",
        choices=[mode.value for mode in Advance],
        help="Characters that move the alternation: letters only (default), "
             "everything but whitespace, or all characters"
    )
    style_group.add_argument(
        "--seed",
        type=int,
        help="Seed for the random style"
    )
    style_group.add_argument(
        "--list-styles",
        action="store_true",
        help="Show the named styles and exit"
    )

    output_group = parser.add_argument_group("Output")
    destinations = output_group.add_mutually_exclusive_group()
    destinations.add_argument(
        "-o", "--output-file",
        help="Write the result to a file"
    )
    destinations.add_argument(
        "-c", "--clip",
        action="store_true",
        help="Copy the result to the clipboard instead of printing it"
    )

    misc_group = parser.add_argument_group("Miscellaneous")
    misc_group.add_argument(
        "--config",
        help="Path to configuration file (default: spongify.yaml)"
    )
    misc_group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Verbose output on stderr (use -vv for debug)"
    )
    misc_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all messages"
    )
    misc_group.add_argument(
        "--log-file",
        help="Also write a debug log to this file"
    )
    misc_group.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not sys.stderr.isatty():
        Colors.disable()

    return Spongify(args).run()


def run():
    """Console script wrapper."""
    sys.exit(main())
