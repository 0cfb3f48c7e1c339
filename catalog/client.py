"""
catalog.client - Async access to the catalog service over HTTP.

Every public method is a coroutine.  The blocking requests exchange
runs in a worker thread (asyncio.to_thread) so the event loop stays
responsive while a call is in flight.  Each call is a standalone
requests.request with its own connection; nothing is shared between
worker threads.  Transport failures are caught here and re-raised as
the operation's CatalogError kind.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Optional
from urllib.parse import quote

import requests

import config
from catalog.codec import update_payload
from catalog.errors import (
    CatalogError, CreateFailed, FetchFailed, MalformedResponse,
    RevisionFailed, SaveFailed,
)
from catalog.models import Category, Part, PartSummary, SourceRecord

logger = logging.getLogger(__name__)


class CatalogClient:

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = (base_url or config.API_BASE).rstrip("/")
        self.timeout = config.API_TIMEOUT if timeout is None else timeout
        self.headers = {
            "Accept": "application/json",
            "User-Agent": config.USER_AGENT,
        }
        token = config.API_TOKEN if token is None else token
        if token:
            self.headers["Authorization"] = f"Token {token}"

    # ── Read ───────────────────────────────────────────────────────────

    async def list_categories(self) -> list[Category]:
        """GET /v1/categories.json"""
        data = await self._call("GET", "/v1/categories.json", FetchFailed)
        if not isinstance(data, list):
            raise MalformedResponse(
                f"categories response is not a list: {type(data).__name__}")
        return [Category.from_json(item) for item in data]

    async def list_parts(self, category_id: str) -> list[PartSummary]:
        """
        GET /v1/parts/category/{id}.json

        Raises MalformedResponse when the payload is not a list of
        {id, name} objects.
        """
        path = f"/v1/parts/category/{quote(category_id, safe='')}.json"
        data = await self._call("GET", path, FetchFailed)
        if not isinstance(data, list):
            raise MalformedResponse(
                f"parts response for {category_id} is not a list: "
                f"{type(data).__name__}")
        return [PartSummary.from_json(item) for item in data]

    async def get_part(self, part_id: str) -> Part:
        """GET /v1/parts/{id}.json"""
        data = await self._call("GET", self._part_path(part_id), FetchFailed)
        return Part.from_json(data)

    # ── Write ──────────────────────────────────────────────────────────

    async def create_part(
        self, part_id: str, name: str, category_id: str,
    ) -> Optional[PartSummary]:
        """
        POST /v1/parts.json  {id, name, category}

        Returns the created summary, or None for an empty acknowledgement.
        """
        body = {"id": part_id, "name": name, "category": category_id}
        data = await self._call("POST", "/v1/parts.json", CreateFailed, json=body)
        if not data:
            return None
        try:
            return PartSummary.from_json(data)
        except MalformedResponse:
            logger.warning(f"Unexpected create response for {part_id}: {data!r}")
            return None

    async def update_part(
        self,
        part_id: str,
        description: str,
        sources: Iterable[SourceRecord],
    ) -> Part:
        """PUT /v1/parts/{id}.json  {description, sources} → canonical part"""
        body = update_payload(sources, description)
        data = await self._call("PUT", self._part_path(part_id), SaveFailed, json=body)
        try:
            return Part.from_json(data)
        except MalformedResponse as exc:
            raise SaveFailed(f"save of {part_id} returned a malformed part: {exc}") from exc

    async def start_revision(self, part_id: str) -> str:
        """POST /v1/parts/{id}/revision → identifier of the new revision."""
        path = f"/v1/parts/{quote(part_id, safe='')}/revision"
        data = await self._call("POST", path, RevisionFailed)
        new_id = data.get("id") if isinstance(data, dict) else None
        if not isinstance(new_id, str) or not new_id:
            raise RevisionFailed(f"revision of {part_id} returned no part id")
        return new_id

    # ── Transport ──────────────────────────────────────────────────────

    @staticmethod
    def _part_path(part_id: str) -> str:
        return f"/v1/parts/{quote(part_id, safe='')}.json"

    async def _call(
        self,
        method: str,
        path: str,
        failure: type[CatalogError],
        json: Any = None,
    ) -> Any:
        return await asyncio.to_thread(self._request, method, path, failure, json)

    def _request(
        self,
        method: str,
        path: str,
        failure: type[CatalogError],
        json: Any = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")
        try:
            response = requests.request(
                method, url, headers=self.headers, json=json,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error(f"{method} {url} failed: {exc}")
            raise failure(f"{method} {path}: {exc}") from exc

        if not 200 <= response.status_code < 300:
            detail = (response.text or "").strip()[:200]
            logger.error(f"{method} {url} → {response.status_code} {detail}")
            raise failure(f"{method} {path}: {detail or 'request failed'}",
                          status=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise failure(f"{method} {path}: response is not JSON") from exc
