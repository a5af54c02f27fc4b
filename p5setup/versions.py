"""Version lookups and downloads backed by the jsDelivr APIs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Protocol, runtime_checkable

import httpx

from .errors import VersionFetchError

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://data.jsdelivr.com/v1/package/npm"


@dataclass(frozen=True)
class DownloadResult:
    """Body and status of a single download attempt."""

    ok: bool
    status_code: int
    content: bytes = b""

    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


@runtime_checkable
class VersionFetcher(Protocol):
    """Port for listing library versions and downloading artifacts."""

    def get_versions(self, package: Optional[str] = None) -> List[str]:
        ...

    def get_latest(self, package: Optional[str] = None) -> str:
        ...

    def download(self, url: str) -> DownloadResult:
        ...


class JsDelivrVersionFetcher:
    """Reads version metadata from the jsDelivr data API."""

    def __init__(
        self,
        package: str = "p5",
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 15.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.package = package
        self.base_url = base_url.rstrip("/")
        self.client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "JsDelivrVersionFetcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_versions(self, package: Optional[str] = None) -> List[str]:
        """Return every published version, newest first as the API lists them."""

        versions = self._metadata(package or self.package).get("versions")
        if not isinstance(versions, list):
            raise VersionFetchError(f"No version list for {package or self.package}")
        return [str(item) for item in versions]

    def get_latest(self, package: Optional[str] = None) -> str:
        tags = self._metadata(package or self.package).get("tags")
        latest = tags.get("latest") if isinstance(tags, dict) else None
        if not latest:
            raise VersionFetchError(f"No latest tag for {package or self.package}")
        return str(latest)

    def download(self, url: str) -> DownloadResult:
        try:
            response = self.client.get(url)
        except httpx.HTTPError as exc:
            raise VersionFetchError(f"Could not download {url}: {exc}") from exc
        if not response.is_success:
            logger.debug("Download of %s returned HTTP %s", url, response.status_code)
            return DownloadResult(ok=False, status_code=response.status_code)
        return DownloadResult(ok=True, status_code=response.status_code, content=response.content)

    def _metadata(self, package: str) -> dict[str, Any]:
        url = f"{self.base_url}/{package}"
        try:
            response = self.client.get(url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise VersionFetchError(f"Could not fetch versions for {package}: {exc}") from exc
        except ValueError as exc:
            raise VersionFetchError(f"Malformed version payload for {package}") from exc
        if not isinstance(payload, dict):
            raise VersionFetchError(f"Malformed version payload for {package}")
        return payload
