"""Shared fixtures for core service tests."""

import gzip
import io
import tarfile

import pytest


@pytest.fixture
def tar_gz_factory():
    """Return a builder for in-memory .tar.gz archives.

    The builder takes a mapping of entry names to contents and returns the
    compressed bytes of a USTAR archive holding regular files only.
    """

    def factory(files: dict[str, bytes], mode: int = 0o644) -> bytes:
        buf = io.BytesIO()
        with tarfile.open(
            fileobj=buf, mode="w", format=tarfile.USTAR_FORMAT
        ) as tar:
            for name, content in files.items():
                info = tarfile.TarInfo(name)
                info.size = len(content)
                info.mode = mode
                tar.addfile(info, io.BytesIO(content))
        return gzip.compress(buf.getvalue())

    return factory
