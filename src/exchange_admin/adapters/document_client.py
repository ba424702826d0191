"""HTTP client for the admin document endpoints."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class DocumentClient(Protocol):
    """Interface for retrieving documents from the admin API."""

    async def probe_content_type(self, locator: str) -> str | None:
        """Issue a metadata-only request and return the declared content type."""

    async def fetch_document(self, locator: str) -> tuple[str | None, bytes]:
        """Download a document and return its content type and body."""


@dataclass
class HttpxDocumentClient(DocumentClient):
    """Document client using httpx."""

    base_url: str
    admin_token: str
    http_client: httpx.AsyncClient
    timeout: float = 30

    @classmethod
    def create(cls, base_url: str, admin_token: str) -> "HttpxDocumentClient":
        """Create a document client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            admin_token=admin_token,
            http_client=httpx.AsyncClient(),
        )

    async def probe_content_type(self, locator: str) -> str | None:
        """Send a HEAD request for the document."""
        response = await self.http_client.head(
            f"{self.base_url}{locator}",
            headers=self._headers(),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.headers.get("content-type")

    async def fetch_document(self, locator: str) -> tuple[str | None, bytes]:
        """Download the full document body."""
        response = await self.http_client.get(
            f"{self.base_url}{locator}",
            headers=self._headers(),
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.headers.get("content-type"), response.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    def _headers(self) -> dict[str, str]:
        return {"X-Admin-Token": self.admin_token}
