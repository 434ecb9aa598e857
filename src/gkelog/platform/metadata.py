"""
GCE metadata server client.

Answers the three questions the bootstrap needs: are we on GCE, which
project, which instance. Presence detection mirrors the Google client
libraries: an explicit ``GCE_METADATA_HOST`` wins, otherwise the metadata
IP is probed over HTTP and ``metadata.google.internal`` is resolved as a
fallback.
"""

from __future__ import annotations

import socket
from typing import Optional

import httpx

from gkelog.config import MetadataSettings
from gkelog.errors import MetadataError

METADATA_FLAVOR_HEADER = "Metadata-Flavor"
METADATA_FLAVOR = "Google"
METADATA_HOST_NAME = "metadata.google.internal"
METADATA_PATH_PREFIX = "/computeMetadata/v1/"


class MetadataClient:
    """Synchronous client for the GCE metadata server."""

    def __init__(
        self,
        settings: Optional[MetadataSettings] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings or MetadataSettings()
        self._transport = transport
        self._on_gce: Optional[bool] = None

    @property
    def host(self) -> str:
        return self._settings.host or self._settings.ip

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self._settings.timeout,
            headers={METADATA_FLAVOR_HEADER: METADATA_FLAVOR},
            transport=self._transport,
            trust_env=False,
        )

    def on_gce(self) -> bool:
        """Report whether the process runs on Google Compute Engine (cached)."""
        if self._on_gce is None:
            self._on_gce = self._detect()
        return self._on_gce

    def _detect(self) -> bool:
        if self._settings.host:
            return True
        if self._ping():
            return True
        return self._resolves()

    def _ping(self) -> bool:
        try:
            with self._client() as client:
                response = client.get(f"http://{self._settings.ip}/")
        except (httpx.HTTPError, httpx.InvalidURL):
            return False
        return response.headers.get(METADATA_FLAVOR_HEADER) == METADATA_FLAVOR

    def _resolves(self) -> bool:
        if self._transport is not None:
            # A mocked transport stands in for the whole network
            return False
        try:
            return bool(socket.getaddrinfo(METADATA_HOST_NAME, None))
        except OSError:
            return False

    def get(self, suffix: str) -> str:
        """Fetch ``/computeMetadata/v1/<suffix>`` as trimmed text."""
        path = METADATA_PATH_PREFIX + suffix.lstrip("/")
        url = f"http://{self.host}{path}"
        try:
            with self._client() as client:
                response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                raise MetadataError(f"metadata: {suffix} not defined", path=path) from exc
            raise MetadataError(
                f"metadata: GET {url} returned status {exc.response.status_code}", path=path
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise MetadataError(f"metadata: GET {url} failed: {exc}", path=path) from exc
        return response.text.strip()

    def project_id(self) -> str:
        return self.get("project/project-id")

    def instance_name(self) -> str:
        return self.get("instance/name")
