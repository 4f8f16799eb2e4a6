"""Archive extraction: streaming tar.gz decoding and zip support."""

from release_installer.core.extract.archive import (
    decode_tar_gz_chunks,
    decode_tar_gz_stream,
    extract_archive,
    extract_tar_gz,
    extract_zip,
    resolve_safe_path,
)
from release_installer.core.extract.gzip_stream import GzipDecompressor
from release_installer.core.extract.tar import (
    DecoderState,
    TarHeader,
    TarStreamDecoder,
)

__all__ = [
    "DecoderState",
    "GzipDecompressor",
    "TarHeader",
    "TarStreamDecoder",
    "decode_tar_gz_chunks",
    "decode_tar_gz_stream",
    "extract_archive",
    "extract_tar_gz",
    "extract_zip",
    "resolve_safe_path",
]
