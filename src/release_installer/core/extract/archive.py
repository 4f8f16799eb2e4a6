"""Archive extraction entry points.

``.tar.gz``/``.tgz`` archives are streamed through GzipDecompressor and
TarStreamDecoder; ``.zip`` archives go through zipfile in a worker thread.
Both reject entry names that would land outside the output directory.
"""

import asyncio
import zipfile
from collections.abc import AsyncIterable, Iterable
from pathlib import Path

import aiofiles

from release_installer.constants import (
    EXTRACT_READ_CHUNK_SIZE,
    TAR_GZ_SUFFIXES,
    ZIP_SUFFIX,
)
from release_installer.core.extract.gzip_stream import GzipDecompressor
from release_installer.core.extract.tar import TarStreamDecoder
from release_installer.exceptions import (
    ExtractionError,
    UnsafeArchiveEntryError,
)
from release_installer.logger import get_logger

logger = get_logger(__name__)


def resolve_safe_path(root: Path, name: str) -> Path:
    """Resolve an archive entry name, refusing paths outside ``root``.

    Args:
        root: Extraction root
        name: Entry name from the archive

    Returns:
        Resolved output path

    Raises:
        UnsafeArchiveEntryError: For absolute names or ".." escapes

    """
    dest_root = root.resolve()
    target = (dest_root / name).resolve()
    if target == dest_root or dest_root not in target.parents:
        raise UnsafeArchiveEntryError(
            "entry would be written outside the output directory",
            target=name,
        )
    return target


def decode_tar_gz_chunks(
    chunks: Iterable[bytes], output_dir: Path
) -> list[Path]:
    """Decode gzip-compressed tar data from an iterable of chunks.

    Args:
        chunks: Compressed data in delivery order
        output_dir: Extraction root (created if missing)

    Returns:
        Paths of the files written, in archive order

    """
    output_dir.mkdir(parents=True, exist_ok=True)
    decompressor = GzipDecompressor()
    with TarStreamDecoder(output_dir, resolve_safe_path) as decoder:
        for chunk in chunks:
            decoder.feed(decompressor.decompress(chunk))
        decoder.feed(decompressor.flush())
    return decoder.extracted_files


async def decode_tar_gz_stream(
    chunks: AsyncIterable[bytes], output_dir: Path
) -> list[Path]:
    """Decode gzip-compressed tar data from an async chunk source.

    Each chunk is fully decoded before the next one is awaited.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    decompressor = GzipDecompressor()
    with TarStreamDecoder(output_dir, resolve_safe_path) as decoder:
        async for chunk in chunks:
            decoder.feed(decompressor.decompress(chunk))
        decoder.feed(decompressor.flush())

    logger.debug(
        "Decompressed %d bytes into %d bytes",
        decompressor.bytes_in,
        decompressor.bytes_out,
    )
    return decoder.extracted_files


async def _read_chunks(path: Path, chunk_size: int):
    async with aiofiles.open(path, mode="rb") as f:
        while chunk := await f.read(chunk_size):
            yield chunk


async def extract_tar_gz(archive_path: Path, output_dir: Path) -> list[Path]:
    """Extract a .tar.gz archive into ``output_dir``.

    Args:
        archive_path: Archive on disk
        output_dir: Extraction root

    Returns:
        Paths of the files written

    Raises:
        ExtractionError: If the gzip layer is corrupt or an entry is unsafe
        OSError: If the archive cannot be read or a file cannot be written

    """
    logger.debug("Extracting tar.gz %s -> %s", archive_path, output_dir)
    return await decode_tar_gz_stream(
        _read_chunks(archive_path, EXTRACT_READ_CHUNK_SIZE), output_dir
    )


def _extract_zip_sync(archive_path: Path, output_dir: Path) -> list[Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    extracted: list[Path] = []
    try:
        with zipfile.ZipFile(archive_path) as zf:
            members = zf.infolist()
            root = output_dir.resolve()
            for member in members:
                # "./" style directory entries name the root itself
                target = (root / member.filename).resolve()
                if member.is_dir() and target == root:
                    continue
                resolve_safe_path(output_dir, member.filename)
            for member in members:
                target = Path(zf.extract(member, output_dir))
                if not member.is_dir():
                    extracted.append(target)
    except zipfile.BadZipFile as e:
        raise ExtractionError(str(e), target=archive_path.name) from e
    return extracted


async def extract_zip(archive_path: Path, output_dir: Path) -> list[Path]:
    """Extract a .zip archive into ``output_dir`` in a worker thread.

    Raises:
        ExtractionError: If the archive is invalid or an entry is unsafe

    """
    logger.debug("Extracting zip %s -> %s", archive_path, output_dir)
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None, _extract_zip_sync, archive_path, output_dir
    )


async def extract_archive(archive_path: Path, output_dir: Path) -> list[Path]:
    """Extract an archive, choosing the format from its file name.

    Args:
        archive_path: Archive on disk
        output_dir: Extraction root

    Returns:
        Paths of the files written

    Raises:
        ExtractionError: If the format is unsupported or extraction fails

    """
    name = archive_path.name.lower()
    output_dir.mkdir(parents=True, exist_ok=True)

    if name.endswith(TAR_GZ_SUFFIXES):
        return await extract_tar_gz(archive_path, output_dir)
    if name.endswith(ZIP_SUFFIX):
        return await extract_zip(archive_path, output_dir)

    msg = f"Unsupported archive format: {archive_path.name}"
    raise ExtractionError(msg)
