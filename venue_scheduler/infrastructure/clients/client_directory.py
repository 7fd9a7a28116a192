from __future__ import annotations

import logging

import httpx

from venue_scheduler.application.ports.client_directory import ClientDirectoryPort
from venue_scheduler.core.config import settings
from venue_scheduler.domain.entities.booking import ClientRef


class MemoryClientDirectory(ClientDirectoryPort):
    def __init__(self, clients: dict[int, str] | None = None) -> None:
        self._clients = dict(clients or {})

    def resolve_client(self, client_id: int) -> ClientRef | None:
        name = self._clients.get(client_id)
        if name is None:
            return None
        return ClientRef(id=client_id, name=name)


class HttpClientDirectory(ClientDirectoryPort):
    """Client names from the venue REST API (`/users/{id}`), cached per instance."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = (base_url or settings.BOOKING_API_BASE_URL or "").rstrip("/")
        self._token = token if token is not None else settings.BOOKING_API_TOKEN
        self._client = client or httpx.Client(timeout=settings.BOOKING_API_TIMEOUT_SECONDS)
        self._cache: dict[int, ClientRef | None] = {}
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("BOOKING_API_BASE_URL is required for the HTTP client directory")

    def resolve_client(self, client_id: int) -> ClientRef | None:
        if client_id in self._cache:
            return self._cache[client_id]

        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}
        try:
            response = self._client.get(f"{self._base_url}/users/{client_id}", headers=headers)
            if response.status_code == 404:
                self._cache[client_id] = None
                return None
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            # Names are display-only; fall back to whatever the booking carries.
            self._logger.error("Error resolving client", extra={"error": str(e)})
            return None

        if not isinstance(data, dict):
            return None
        ref = ClientRef(id=int(data.get("id", client_id)), name=str(data.get("name") or ""))
        self._cache[client_id] = ref
        return ref
