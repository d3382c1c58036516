"""Snipe-IT REST API implementation of the InventoryClient interface."""

import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from assetsync.client.base import E, InventoryClient
from assetsync.client.mappers import entity_from_json, entity_to_json, operation_from_json
from assetsync.domain.entities import (
    Asset,
    AssetCollection,
    NamedEntity,
    OperationResult,
    SearchFilter,
)
from assetsync.domain.errors import RemoteRequestError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
SEARCH_PAGE_SIZE = 500


class SnipeItClient(InventoryClient):
    """Client for the Snipe-IT API (v1)."""

    def __init__(
        self,
        base_uri: str,
        api_token: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            base_uri: API base URI (e.g. "https://snipe.example.com/api/v1")
            api_token: Bearer token
            timeout: Timeout in seconds for every request
            session: Optional requests session (a new one is created if None)
        """
        self.base_uri = base_uri.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {api_token}",
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )

    def _url(self, path: str) -> str:
        return f"{self.base_uri}/{path}"

    def _request(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        """Send a request and return the decoded JSON body."""
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise RemoteRequestError(f"{method} {url} failed: {e}") from e

        if response.status_code >= 400:
            raise RemoteRequestError(
                f"{method} {url} returned HTTP {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise RemoteRequestError(
                f"{method} {url} returned invalid JSON: {e}", status_code=response.status_code
            ) from e

    def _search_page(
        self, entity_type: type[E], search: str, limit: int, offset: Optional[int]
    ) -> tuple[int, list[E]]:
        params: dict[str, Any] = {"search": search, "limit": limit}
        if offset is not None:
            params["offset"] = offset
        body = self._request("GET", entity_type.endpoint, params=params)
        rows = [entity_from_json(entity_type, row) for row in body.get("rows") or []]
        return int(body.get("total") or 0), rows

    def search(self, entity_type: type[E], search_filter: SearchFilter) -> list[E]:
        """Search entities through the endpoint's ``search`` parameter.

        Search is a substring match and results are paged, so without an
        explicit limit every page is read until ``total`` rows were seen.
        """
        if search_filter.limit is not None:
            return self._search_page(
                entity_type, search_filter.search, search_filter.limit, search_filter.offset
            )[1]

        rows: list[E] = []
        offset = search_filter.offset or 0
        while True:
            total, page = self._search_page(
                entity_type, search_filter.search, SEARCH_PAGE_SIZE, offset
            )
            rows.extend(page)
            offset += len(page)
            if not page or offset >= total:
                return rows

    def get(self, entity_type: type[E], entity_id: int) -> Optional[E]:
        """Get entity by ID; None if the service does not know it."""
        try:
            body = self._request("GET", f"{entity_type.endpoint}/{entity_id}")
        except RemoteRequestError as e:
            if e.status_code == 404:
                return None
            raise
        # Unknown IDs may also come back as HTTP 200 with an error status
        if body.get("status") == "error":
            return None
        return entity_from_json(entity_type, body)

    def create(self, entity: NamedEntity | Asset) -> OperationResult:
        """POST a new entity."""
        entity_type = type(entity)
        body = self._request("POST", entity_type.endpoint, json=entity_to_json(entity))
        return operation_from_json("create", entity_type, body)

    def update_asset(self, asset: Asset) -> OperationResult:
        """PATCH an existing asset."""
        if asset.id is None:
            raise ValueError("Cannot update an asset without an id")
        body = self._request("PATCH", f"{Asset.endpoint}/{asset.id}", json=entity_to_json(asset))
        return operation_from_json("update", Asset, body)

    def get_assets_by_serial(self, serial: str) -> AssetCollection:
        """GET hardware/byserial/<serial>; the service matches serials exactly."""
        try:
            body = self._request("GET", f"{Asset.endpoint}/byserial/{quote(serial, safe='')}")
        except RemoteRequestError as e:
            if e.status_code == 404:
                return AssetCollection(total=0, rows=[])
            raise
        if body.get("status") == "error":
            return AssetCollection(total=0, rows=[])
        rows = [entity_from_json(Asset, row) for row in body.get("rows") or []]
        return AssetCollection(total=int(body.get("total") or 0), rows=rows)

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()
