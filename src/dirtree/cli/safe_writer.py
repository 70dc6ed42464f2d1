"""Signal-aware output writing for the dirtree CLI."""

import errno
import os
import types
from pathlib import Path
from typing import IO, Optional, Type, Union

from dirtree.cli.signal_handler import signal_handler


class SafeWriter:
    """Writes UTF-8 text to a file descriptor or a file path.

    File names that are not valid UTF-8 are written back as their original bytes.
    Writing stops with BrokenPipeError as soon as SIGPIPE or SIGINT has been received,
    or when the operating system reports EPIPE, so callers only have to handle one
    exception to stop cleanly.

    Attributes:
        fd (int): The file descriptor being written to.

    Example:
        >>> with SafeWriter(Path("tree.txt")) as writer:  # doctest: +SKIP
        ...     writer.write_line("project")
    """

    def __init__(self, target: Union[int, str, os.PathLike]):
        """Initialize the writer.

        Args:
            target: An open file descriptor, or a path to create or truncate.

        Raises:
            TypeError: If target is neither a descriptor nor a path.
            OSError: If the file can't be opened.
        """
        self._closed = False
        self._file_obj: Optional[IO[str]] = None

        if isinstance(target, int):
            self.fd = target
        elif isinstance(target, (str, os.PathLike)):
            self._file_obj = Path(target).open("w", encoding="utf-8", errors="surrogateescape")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(target).__name__}")

    def write(self, data: str) -> None:
        """Write text to the target.

        Raises:
            BrokenPipeError: If a signal was received or the pipe is closed.
            ValueError: If the writer is closed.
            OSError: For other write failures.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")
        if signal_handler.interrupted:
            raise BrokenPipeError()

        # Names that are not valid UTF-8 arrive surrogate-escaped; write their original bytes
        payload = data.encode("utf-8", errors="surrogateescape")
        try:
            # os.write may write only part of the buffer
            while payload:
                written = os.write(self.fd, payload)
                payload = payload[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError() from e
            raise

    def write_line(self, line: str) -> None:
        self.write(line + "\n")

    def close(self) -> None:
        """Close the file if this writer opened it; descriptors passed in are left open."""
        if self._closed:
            return

        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An exception from the with block takes priority over a close failure
            if exc_type is None:
                raise
