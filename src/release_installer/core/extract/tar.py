"""Streaming tar decoder.

The decoder is push-driven: callers hand it decompressed chunks of any
size with ``feed()`` and signal end of input with ``close()``. It is an
explicit two-state machine over a growable buffer:

    AWAITING_HEADER --(regular file, size > 0)--> READING_BODY
    READING_BODY --(all content written)--> AWAITING_HEADER

Whole 512-byte blocks are only examined once they are fully buffered;
until then the decoder waits for more input. Padding after file content,
and data blocks of entries that are not written (pax records, long-name
records, ...), are skipped through a deferred skip counter so the skip
may span any number of chunks.

Leniency:
    - blocks whose name field is all zero (end-of-archive markers and
      encoder padding) are skipped
    - zero-length files, directories, links and other non-regular entries
      produce no output
    - a truncated archive leaves a truncated last file; no error is raised

Entry names are not sanitized here. Extraction entry points pass a
``path_resolver`` that rejects names escaping the destination.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import BinaryIO

from release_installer.constants import (
    TAR_BLOCK_SIZE,
    TAR_NAME_FIELD,
    TAR_SIZE_FIELD,
    TAR_TYPE_FLAG_OFFSET,
)
from release_installer.logger import get_logger

logger = get_logger(__name__)

PathResolver = Callable[[Path, str], Path]

REGULAR_FILE_FLAGS = frozenset({0, ord("0")})


def join_entry_path(root: Path, name: str) -> Path:
    """Join an archive entry name onto the destination root."""
    return root / name


def padding_for(size: int) -> int:
    """Return the number of padding bytes after ``size`` bytes of content."""
    return (TAR_BLOCK_SIZE - size % TAR_BLOCK_SIZE) % TAR_BLOCK_SIZE


def _parse_octal(field: bytes) -> int:
    """Parse a NUL/space padded octal field; empty or invalid gives 0."""
    text = field.split(b"\0", 1)[0].strip()
    if not text:
        return 0
    try:
        return int(text, 8)
    except ValueError:
        return 0


@dataclass(slots=True, frozen=True)
class TarHeader:
    """Fields of a tar header block that extraction needs.

    Attributes:
        name: Entry name (up to the first NUL of the 100-byte name field)
        size: Content size in bytes
        type_flag: Raw type flag byte
        is_regular_file: Whether the entry is a plain file

    """

    name: str
    size: int
    type_flag: int
    is_regular_file: bool

    @staticmethod
    def is_empty_block(block: bytes | bytearray | memoryview) -> bool:
        """Return True if the name field of ``block`` is all zero."""
        return not any(block[TAR_NAME_FIELD])

    @classmethod
    def parse(cls, block: bytes | bytearray | memoryview) -> TarHeader:
        """Parse a 512-byte header block.

        Args:
            block: Exactly one tar block

        Returns:
            Parsed header

        """
        raw_name = bytes(block[TAR_NAME_FIELD]).split(b"\0", 1)[0]
        type_flag = block[TAR_TYPE_FLAG_OFFSET]
        return cls(
            name=raw_name.decode("utf-8", errors="replace"),
            size=_parse_octal(bytes(block[TAR_SIZE_FIELD])),
            type_flag=type_flag,
            is_regular_file=type_flag in REGULAR_FILE_FLAGS,
        )


class DecoderState(Enum):
    """States of the tar stream decoder."""

    AWAITING_HEADER = auto()
    READING_BODY = auto()


@dataclass(slots=True)
class _OpenFile:
    path: Path
    size: int
    remaining: int
    handle: BinaryIO


class TarStreamDecoder:
    """Decode a tar stream pushed in arbitrary chunks into files on disk.

    Usage:
        with TarStreamDecoder(dest) as decoder:
            for chunk in chunks:
                decoder.feed(chunk)
        # leaving the block calls close(); on error, the open file is
        # closed and left on disk as-is

    """

    def __init__(
        self,
        destination: Path,
        path_resolver: PathResolver | None = None,
    ) -> None:
        """Initialize the decoder.

        Args:
            destination: Root directory for extracted files
            path_resolver: Maps (root, entry name) to an output path;
                defaults to a plain join

        """
        self.destination = destination
        self.path_resolver = path_resolver or join_entry_path
        self.state = DecoderState.AWAITING_HEADER
        self.extracted_files: list[Path] = []
        self._buffer = bytearray()
        self._current: _OpenFile | None = None
        self._skip_remaining = 0
        self._closed = False

    def __enter__(self) -> TarStreamDecoder:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()

    @property
    def buffered(self) -> int:
        """Number of bytes waiting in the internal buffer."""
        return len(self._buffer)

    def feed(self, chunk: bytes | bytearray | memoryview) -> None:
        """Push the next chunk of decompressed tar data.

        Raises:
            ValueError: If the decoder was already closed
            OSError: If a directory or file cannot be created or written

        """
        if self._closed:
            msg = "feed() called on a closed TarStreamDecoder"
            raise ValueError(msg)
        if chunk:
            self._buffer += chunk
        self._process()

    def close(self) -> None:
        """Signal end of input and close any file still being written.

        A file whose content was cut short keeps the bytes received so far.
        """
        if self._closed:
            return
        self._closed = True
        if self._current is not None:
            logger.warning(
                "Archive ended %d bytes early; %s is truncated",
                self._current.remaining,
                self._current.path,
            )
            self._close_current()
        if self._buffer:
            logger.debug(
                "Discarding %d trailing bytes after last tar block",
                len(self._buffer),
            )
        self._buffer.clear()

    def abort(self) -> None:
        """Stop decoding after a failure, closing the open output handle."""
        self._closed = True
        if self._current is not None:
            logger.debug("Aborting extraction of %s", self._current.path)
            self._close_current()
        self._buffer.clear()

    def _process(self) -> None:
        """Advance the state machine until more input is required."""
        while True:
            if self._skip_remaining and not self._skip_buffered():
                return

            if self.state is DecoderState.AWAITING_HEADER:
                if len(self._buffer) < TAR_BLOCK_SIZE:
                    return
                block = bytes(self._buffer[:TAR_BLOCK_SIZE])
                del self._buffer[:TAR_BLOCK_SIZE]
                self._handle_header(block)
            else:
                if not self._buffer:
                    return
                self._write_body()

    def _skip_buffered(self) -> bool:
        """Discard pending skip bytes; True once the skip is complete."""
        count = min(self._skip_remaining, len(self._buffer))
        del self._buffer[:count]
        self._skip_remaining -= count
        return self._skip_remaining == 0

    def _handle_header(self, block: bytes) -> None:
        if TarHeader.is_empty_block(block):
            return

        header = TarHeader.parse(block)

        if not header.is_regular_file:
            logger.debug(
                "Skipping non-file entry %r (type %r)",
                header.name,
                chr(header.type_flag),
            )
            # Data that belongs to the entry must not be read as headers
            self._skip_remaining = header.size + padding_for(header.size)
            return

        if header.size == 0:
            logger.debug("Skipping empty file entry %r", header.name)
            return

        path = self.path_resolver(self.destination, header.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Extracting %s (%d bytes)", header.name, header.size)
        self._current = _OpenFile(
            path=path,
            size=header.size,
            remaining=header.size,
            handle=path.open("wb"),
        )
        self.state = DecoderState.READING_BODY

    def _write_body(self) -> None:
        current = self._current
        if current is None:
            self.state = DecoderState.AWAITING_HEADER
            return

        count = min(current.remaining, len(self._buffer))
        current.handle.write(self._buffer[:count])
        del self._buffer[:count]
        current.remaining -= count

        if current.remaining == 0:
            self._close_current()
            self._skip_remaining = padding_for(current.size)
            self.state = DecoderState.AWAITING_HEADER

    def _close_current(self) -> None:
        current = self._current
        if current is None:
            return
        self._current = None
        current.handle.close()
        self.extracted_files.append(current.path)
