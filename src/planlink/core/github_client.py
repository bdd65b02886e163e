"""GitHub contents API client used for plan file existence checks."""

from __future__ import annotations

import logging
from typing import Protocol
from urllib.parse import quote

import httpx

from planlink.core.errors import ExistenceCheckError

logger = logging.getLogger(__name__)


class ExistenceChecker(Protocol):
    """Async capability answering whether a path exists in a repository."""

    async def exists(self, owner: str, repo: str, path: str, credential: str) -> bool:
        """Return True if ``path`` exists in ``owner/repo``."""


class GitHubApiClient:
    """Stateless client for ``GET /repos/{owner}/{repo}/contents/{path}``."""

    def __init__(
        self,
        *,
        base_url: str = "https://api.github.com",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def contents_url(self, owner: str, repo: str, path: str) -> str:
        return (
            f"{self._base_url}/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"
            f"/contents/{quote(path.lstrip('/'), safe='/')}"
        )

    async def exists(self, owner: str, repo: str, path: str, credential: str) -> bool:
        url = self.contents_url(owner, repo, path)
        headers = {"Accept": "application/vnd.github.v3+json"}
        if credential:
            headers["Authorization"] = f"token {credential}"
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url, headers=headers)
        except httpx.TimeoutException as exc:
            raise ExistenceCheckError(str(exc) or "timed out", category="network_timeout") from exc
        except httpx.HTTPError as exc:
            raise ExistenceCheckError(str(exc), category="transport_error") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            return False
        if response.status_code != httpx.codes.OK:
            msg = f"http status {response.status_code}"
            raise ExistenceCheckError(msg, category="http_status")

        try:
            payload = response.json()
        except ValueError as exc:
            msg = "Invalid contents response payload"
            raise ExistenceCheckError(msg, category="invalid_payload") from exc
        if not isinstance(payload, dict | list):
            msg = "Invalid contents response payload"
            raise ExistenceCheckError(msg, category="invalid_payload")
        logger.debug("Found %s in %s/%s", path, owner, repo)
        return True
