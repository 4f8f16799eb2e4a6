"""HTTP session utilities for release-installer."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import aiohttp

from release_installer.constants import CONNECTOR_LIMIT, USER_AGENT
from release_installer.types import GlobalConfig


@asynccontextmanager
async def create_http_session(
    global_config: GlobalConfig,
) -> AsyncIterator[aiohttp.ClientSession]:
    """Create a configured HTTP session.

    Args:
        global_config: Global configuration dictionary

    Yields:
        Configured aiohttp.ClientSession

    """
    timeout_seconds = global_config["network"]["timeout_seconds"]

    timeout = aiohttp.ClientTimeout(
        total=timeout_seconds * 60,
        sock_read=timeout_seconds * 3,
        sock_connect=timeout_seconds,
    )
    connector = aiohttp.TCPConnector(limit=CONNECTOR_LIMIT)

    async with aiohttp.ClientSession(
        timeout=timeout,
        connector=connector,
        headers={"User-Agent": USER_AGENT},
    ) as session:
        yield session
