"""GitHub REST API client for listing a developer's public repositories."""

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from core.exceptions import GitHubProfileNotFoundError

logger = structlog.get_logger()


class GitHubClient:
    """Thin async wrapper around ``GET /users/{username}/repos``."""

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        client_id: str = "",
        client_secret: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._auth = (client_id, client_secret) if client_id and client_secret else None
        self._timeout = timeout
        self._transport = transport

    async def get_user_repos(self, username: str, limit: int = 5) -> list[dict[str, Any]]:
        """
        Fetch the oldest-first list of a user's public repositories.

        Raises:
            GitHubProfileNotFoundError: If GitHub answers with anything but 200
            httpx.HTTPError: On transport failures
        """
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.get(
                f"/users/{quote(username, safe='')}/repos",
                params={"per_page": limit, "sort": "created", "direction": "asc"},
                headers={
                    "Accept": "application/vnd.github+json",
                    "User-Agent": "devconnector-api",
                },
                auth=self._auth,
            )

        if response.status_code != 200:
            logger.info(
                "github_repos_not_found",
                username=username,
                status_code=response.status_code,
            )
            raise GitHubProfileNotFoundError(username)

        repos: list[dict[str, Any]] = response.json()
        return repos
