"""destinations.py - Where rendered debug output is written.

This module defines the Destination protocol and its two implementations:

    StreamDestination  — writes to a writable stream (default: stderr).
    FileDestination    — appends to a file on disk, opening and closing it
                         on every write.

A destination is acquired per dispatch call and never cached, so no file
handle outlives the write that needed it. Concurrent writers from separate
processes or threads rely on append-mode atomicity; no locking is done here.

Typical usage::

    from debugcomments.destinations import destination_for

    destination_for(None).write("to stderr")
    destination_for("/tmp/debug.log").write("appended to a file")
"""

import os
import sys
from abc import ABC, abstractmethod
from typing import Optional


class Destination(ABC):
    """Abstract base class for debug output targets.

    Any custom destination must subclass this and implement ``write()``.
    """

    @abstractmethod
    def write(self, content: str) -> None:
        """Write ``content`` to the target, ending with exactly one newline
        if it does not already end with one.

        Raises:
            OSError: If the target cannot be opened or written. Callers
                decide whether the failure is fatal.
        """


def _terminated(content: str) -> str:
    return content if content.endswith("\n") else content + "\n"


class StreamDestination(Destination):
    """Write debug output to a stream (default: sys.stderr).

    Attributes:
        _stream: The writable file-like object to write to.

    Example:
        >>> import io
        >>> buf = io.StringIO()
        >>> StreamDestination(stream=buf).write("hello")
        >>> buf.getvalue()
        'hello\\n'
    """

    def __init__(self, stream=None) -> None:
        """Initialise the stream destination.

        Args:
            stream: A writable file-like object. Defaults to ``sys.stderr``
                so debug output does not pollute the program's stdout.
        """
        self._stream = stream or sys.stderr

    def write(self, content: str) -> None:
        self._stream.write(_terminated(content))
        self._stream.flush()


class FileDestination(Destination):
    """Append debug output to a file on disk.

    The file and any missing parent directories are created on first write.
    The handle is closed on every exit path, including a failed write.

    Attributes:
        _path (str): Absolute or relative path to the output file.
        _encoding (str): File encoding. Defaults to ``"utf-8"``.

    Example:
        >>> from debugcomments.destinations import FileDestination
        >>> destination = FileDestination("/tmp/debug.log")
    """

    def __init__(self, path: str, encoding: str = "utf-8") -> None:
        """Initialise the file destination.

        Args:
            path: Path to the output file.
            encoding: Character encoding for the output file.

        Raises:
            ValueError: If ``path`` is empty.
        """
        if not path:
            raise ValueError("path must not be empty")
        self._path = path
        self._encoding = encoding

    def write(self, content: str) -> None:
        self._ensure_dir()
        with open(self._path, "a", encoding=self._encoding) as f:
            f.write(_terminated(content))

    def _ensure_dir(self) -> None:
        """Create parent directories for the output file if they do not exist."""
        parent = os.path.dirname(os.path.abspath(self._path))
        os.makedirs(parent, exist_ok=True)


def destination_for(path: Optional[str]) -> Destination:
    """Return a FileDestination for ``path``, or stderr if ``path`` is falsy."""
    if path:
        return FileDestination(path)
    return StreamDestination()
