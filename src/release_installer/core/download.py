"""Download service for release assets.

Assets are streamed to disk with aiofiles; failed attempts remove the
partial file and are retried with exponential backoff.
"""

import asyncio
import contextlib
from pathlib import Path

import aiofiles
import aiohttp

from release_installer.constants import (
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    DOWNLOAD_CHUNK_SIZE,
    USER_AGENT,
)
from release_installer.logger import get_logger

logger = get_logger(__name__)


class DownloadError(Exception):
    """Raised when download fails."""


class DownloadService:
    """Service for downloading release assets."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize download service with HTTP session.

        Args:
            session: aiohttp session for downloads
            retry_attempts: Attempts before giving up
            timeout_seconds: Base timeout used to derive ClientTimeout

        """
        self.session = session
        self.retry_attempts = max(1, retry_attempts)
        self.timeout = aiohttp.ClientTimeout(
            total=timeout_seconds * 60,
            sock_read=timeout_seconds * 3,
            sock_connect=timeout_seconds,
        )

    async def download_file(self, url: str, dest: Path) -> Path:
        """Download a file from URL to destination with retry logic.

        Args:
            url: URL to download from
            dest: Destination path

        Returns:
            The destination path

        Raises:
            DownloadError: If download fails after all retry attempts

        """
        headers = {"User-Agent": USER_AGENT}

        for attempt in range(1, self.retry_attempts + 1):
            try:
                async with self.session.get(
                    url, headers=headers, timeout=self.timeout
                ) as response:
                    response.raise_for_status()
                    await self._write_response(response, dest)
                    return dest

            except (aiohttp.ClientError, TimeoutError) as e:
                logger.warning(
                    "Attempt %s/%s failed for %s: %s",
                    attempt,
                    self.retry_attempts,
                    dest.name,
                    e,
                )
                self._cleanup(dest)

                if attempt == self.retry_attempts:
                    msg = f"Failed to download asset {dest.name}: {e}"
                    raise DownloadError(msg) from e

                backoff = 2**attempt
                logger.info("Retrying in %s seconds...", backoff)
                await asyncio.sleep(backoff)
            except BaseException:
                self._cleanup(dest)
                raise

        msg = f"Failed to download asset {dest.name}"
        raise DownloadError(msg)

    async def _write_response(
        self, response: aiohttp.ClientResponse, dest: Path
    ) -> None:
        total = int(response.headers.get("Content-Length", 0))
        dest.parent.mkdir(parents=True, exist_ok=True)

        logger.debug("Downloading file: %s", dest.name)
        logger.debug("   URL: %s", response.url)
        logger.debug("   Size: %s bytes", f"{total:,}" if total else "unknown")

        written = 0
        async with aiofiles.open(dest, mode="wb") as f:
            async for chunk in response.content.iter_chunked(
                DOWNLOAD_CHUNK_SIZE
            ):
                if chunk:
                    await f.write(chunk)
                    written += len(chunk)

        logger.debug("Download completed: %s (%d bytes)", dest, written)

    @staticmethod
    def _cleanup(dest: Path) -> None:
        if dest.exists():
            logger.debug("Removing partial download: %s", dest)
            with contextlib.suppress(OSError):
                dest.unlink()
