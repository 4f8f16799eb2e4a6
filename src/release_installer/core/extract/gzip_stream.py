"""Incremental gzip decompression feeding the tar decoder."""

from __future__ import annotations

import zlib

from release_installer.exceptions import ExtractionError

# zlib window bits selecting the gzip header/trailer format
GZIP_WBITS = zlib.MAX_WBITS | 16


class GzipDecompressor:
    """Decompress a gzip stream chunk by chunk.

    Concatenated gzip members (as produced by ``cat a.gz b.gz``) decode
    back to back, and zero padding after the last member is ignored.
    Input that ends mid-member is tolerated; the decoded prefix is
    returned and the tar layer sees a truncated archive.
    """

    def __init__(self) -> None:
        self._decompressor = zlib.decompressobj(GZIP_WBITS)
        self._at_member_start = True
        self._in_padding = False
        self.members = 0
        self.bytes_in = 0
        self.bytes_out = 0

    def decompress(self, chunk: bytes) -> bytes:
        """Decompress the next chunk of compressed input.

        Raises:
            ExtractionError: If the input is not valid gzip data

        """
        self.bytes_in += len(chunk)
        output = bytearray()
        data = chunk
        try:
            while data and not self._in_padding:
                if (
                    self.members
                    and self._at_member_start
                    and not data.strip(b"\0")
                ):
                    self._in_padding = True
                    break
                self._at_member_start = False
                output += self._decompressor.decompress(data)
                if not self._decompressor.eof:
                    break
                # The next member, if any, starts in unused_data
                self.members += 1
                data = self._decompressor.unused_data
                self._decompressor = zlib.decompressobj(GZIP_WBITS)
                self._at_member_start = True
        except zlib.error as e:
            msg = f"corrupt gzip data: {e}"
            raise ExtractionError(msg) from e

        self.bytes_out += len(output)
        return bytes(output)

    def flush(self) -> bytes:
        """Return any output still held by the decompressor."""
        try:
            tail = self._decompressor.flush()
        except zlib.error as e:
            msg = f"corrupt gzip data: {e}"
            raise ExtractionError(msg) from e
        self.bytes_out += len(tail)
        return tail
