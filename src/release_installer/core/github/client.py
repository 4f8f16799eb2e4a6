"""Low-level GitHub API client for release metadata.

Release lookups are anonymous; rate-limited or failing requests are
retried with exponential backoff, a missing tag is reported at once.
"""

import asyncio
from typing import Any

import aiohttp
import orjson

from release_installer.constants import (
    DEFAULT_RETRY_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    GITHUB_ACCEPT_HEADER,
    GITHUB_API_BASE,
    HTTP_NOT_FOUND,
    USER_AGENT,
)
from release_installer.core.github.models import ReleaseInfo, parse_repo
from release_installer.exceptions import GitHubAPIError, ReleaseNotFoundError
from release_installer.logger import get_logger

logger = get_logger(__name__)


class ReleaseAPIClient:
    """Fetches release metadata from the GitHub REST API."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
        timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
        api_base: str = GITHUB_API_BASE,
    ) -> None:
        """Initialize the API client.

        Args:
            session: aiohttp session for making requests
            retry_attempts: Attempts per request for transient failures
            timeout_seconds: Base timeout used to derive ClientTimeout
            api_base: API root URL

        """
        self.session = session
        self.retry_attempts = max(1, retry_attempts)
        self.timeout = aiohttp.ClientTimeout(
            total=timeout_seconds * 3,
            sock_read=timeout_seconds * 2,
            sock_connect=timeout_seconds,
        )
        self.api_base = api_base.rstrip("/")

    def release_url(self, repo: str, version: str) -> str:
        owner, name = parse_repo(repo)
        return f"{self.api_base}/repos/{owner}/{name}/releases/tags/{version}"

    async def fetch_release(self, repo: str, version: str) -> ReleaseInfo:
        """Fetch a release by tag.

        Args:
            repo: Repository slug "owner/repo"
            version: Release tag

        Returns:
            Release metadata

        Raises:
            ValidationError: If ``repo`` is not an owner/repo slug
            ReleaseNotFoundError: If the tag does not exist (HTTP 404)
            GitHubAPIError: If the API keeps failing after all retries

        """
        url = self.release_url(repo, version)
        data = await self._fetch_json(url)
        if data is None:
            msg = f"Release {version} not found for repository {repo}"
            raise ReleaseNotFoundError(msg)
        if not isinstance(data, dict):
            msg = f"unexpected response body for {url}"
            raise GitHubAPIError(msg)

        release = ReleaseInfo.from_api_response(data)
        logger.debug(
            "Fetched %s %s with %d assets",
            repo,
            release.tag_name,
            len(release.assets),
        )
        return release

    async def _fetch_json(self, url: str) -> Any | None:
        """GET ``url`` and decode the JSON body; None on 404."""
        headers = {"User-Agent": USER_AGENT, "Accept": GITHUB_ACCEPT_HEADER}

        for attempt in range(1, self.retry_attempts + 1):
            try:
                async with self.session.get(
                    url, headers=headers, timeout=self.timeout
                ) as response:
                    if response.status == HTTP_NOT_FOUND:
                        return None
                    response.raise_for_status()
                    return orjson.loads(await response.read())

            except orjson.JSONDecodeError as e:
                msg = f"invalid JSON from {url}: {e}"
                raise GitHubAPIError(msg) from e
            except (aiohttp.ClientError, TimeoutError) as e:
                logger.warning(
                    "Attempt %d/%d for %s failed: %s",
                    attempt,
                    self.retry_attempts,
                    url,
                    e,
                )
                if attempt == self.retry_attempts:
                    msg = f"Failed to fetch release info: {e}"
                    raise GitHubAPIError(msg) from e
                backoff = 2**attempt
                logger.info("Retrying in %s seconds...", backoff)
                await asyncio.sleep(backoff)

        return None
