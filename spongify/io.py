"""
SpOnGiFy - Input Sources and Output Sinks
=========================================
Where text comes from (inline text, a file, stdin) and where the result goes
(stdout, a file, the system clipboard). The transform never sees any of this.
"""

import io
import logging
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, List, Optional, TextIO

import pyperclip

from .exceptions import SpongifyIOError

logger = logging.getLogger("spongify.io")

STDIN_MARKER = "-"


def _strip_newline(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


class InputSource(ABC):
    """A stream of input lines, terminators removed."""

    description = "input"

    @abstractmethod
    def lines(self) -> Iterator[str]:
        pass

    def __iter__(self) -> Iterator[str]:
        return self.lines()


class TextSource(InputSource):
    """Literal text given on the command line."""

    description = "inline text"

    def __init__(self, text: str):
        self.text = text

    def lines(self) -> Iterator[str]:
        for line in io.StringIO(self.text):
            yield _strip_newline(line)


class FileSource(InputSource):
    """Lines read from a file on disk."""

    def __init__(self, path: Path, encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding
        self.description = f"file {self.path}"

    def lines(self) -> Iterator[str]:
        try:
            with open(self.path, "r", encoding=self.encoding) as f:
                for line in f:
                    yield _strip_newline(line)
        except (OSError, LookupError, UnicodeDecodeError) as e:
            raise SpongifyIOError(f"Could not read {self.path}: {e}") from e


class StdinSource(InputSource):
    """Lines read from standard input as they arrive."""

    description = "standard input"

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def lines(self) -> Iterator[str]:
        stream = self.stream or sys.stdin
        try:
            # readline keeps interactive pipes line-buffered
            for line in iter(stream.readline, ""):
                yield _strip_newline(line)
        except (OSError, UnicodeDecodeError) as e:
            raise SpongifyIOError(f"Could not read standard input: {e}") from e


def resolve_input(
    inline: Optional[str] = None,
    text: Optional[str] = None,
    file: Optional[str] = None,
    stdin: bool = False,
    encoding: str = "utf-8"
) -> InputSource:
    """
    Work out which input source the user meant.

    Explicit ``--stdin``, ``--text`` and ``--file`` win. An inline argument
    of ``-`` means stdin, one that names an existing file is read as that
    file, and anything else is literal text. No input at all reads stdin.
    """
    if stdin:
        return StdinSource()
    if text is not None:
        return TextSource(text)
    if file is not None:
        return FileSource(Path(file), encoding=encoding)
    if inline is None or inline == STDIN_MARKER:
        return StdinSource()

    path = Path(inline)
    try:
        if path.is_file():
            logger.info(f"Treating argument as file name: {path}")
            return FileSource(path, encoding=encoding)
    except (OSError, ValueError):
        # Not a usable path (too long, embedded NUL); it is text then.
        pass
    return TextSource(inline)


class OutputSink(ABC):
    """Destination for transformed lines."""

    description = "output"

    @abstractmethod
    def write_line(self, line: str):
        pass

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.close()
        else:
            self.abort()
        return False

    def abort(self):
        """Stop after a failure, keeping whatever was already written."""
        pass


class StreamSink(OutputSink):
    """Newline-terminated lines on a text stream, flushed line by line."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream
        self.description = "standard output"

    def _target(self) -> TextIO:
        return self.stream or sys.stdout

    def write_line(self, line: str):
        target = self._target()
        try:
            target.write(line + "\n")
            target.flush()
        except BrokenPipeError:
            raise
        except OSError as e:
            raise SpongifyIOError(f"Could not write to {self.description}: {e}") from e


class FileSink(StreamSink):
    """Newline-terminated lines written to a file."""

    def __init__(self, path: Path, encoding: str = "utf-8"):
        super().__init__()
        self.path = Path(path)
        self.description = f"file {self.path}"
        try:
            self.stream = open(self.path, "w", encoding=encoding)
        except (OSError, LookupError) as e:
            raise SpongifyIOError(f"Could not open {self.path} for writing: {e}") from e

    def close(self):
        try:
            self.stream.close()
        except OSError as e:
            raise SpongifyIOError(f"Could not write to {self.description}: {e}") from e

    def abort(self):
        self.stream.close()


class ClipboardSink(OutputSink):
    """Collects every line and copies them, joined, to the clipboard on close."""

    description = "clipboard"

    def __init__(self, separator: str = " "):
        self.separator = separator
        self.lines: List[str] = []

    def write_line(self, line: str):
        self.lines.append(line)

    def close(self):
        write_clipboard(self.separator.join(self.lines))


def write_clipboard(text: str):
    """
    Write text to system clipboard.

    Raises:
        SpongifyIOError: If clipboard access fails
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise SpongifyIOError(f"Failed to write to clipboard: {e}") from e
    logger.info(f"Copied {len(text)} characters to clipboard")


def resolve_output(
    output_file: Optional[str] = None,
    clip: bool = False,
    separator: str = " ",
    encoding: str = "utf-8"
) -> OutputSink:
    """Pick the output sink from the command line options."""
    if output_file:
        return FileSink(Path(output_file), encoding=encoding)
    if clip:
        return ClipboardSink(separator=separator)
    return StreamSink()
