"""
services/catalog_client.py – Async client for the board-game catalogue XML API.

Three request shapes are supported: fuzzy text search, exact text search and
identifier lookup. Every response is normalised into GameRecord instances;
items lacking an identifier or a name are silently dropped.

Usage
-----
    async with CatalogClient(config) as client:
        games = await client.search_by_text("catan")
"""

import logging
import warnings
from typing import Dict, List, Optional

import httpx
from bs4 import BeautifulSoup, Tag, XMLParsedAsHTMLWarning

from models.game_record import GameRecord
from services.config import SearchConfig
from services.exceptions import (
    CatalogHTTPError,
    CatalogNetworkError,
    CatalogParseError,
)

logger = logging.getLogger(__name__)

# Item type requested from both endpoints.
ITEM_TYPE: str = "boardgame"


class CatalogClient:
    """
    Thin async wrapper around ``httpx.AsyncClient``.

    Pass ``http_client`` to reuse (or mock) a transport; the client is then
    not closed on exit.
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._config = config or SearchConfig()
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=self._config.http_timeout,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    # ── Public API ────────────────────────────────────────────────────────────

    async def search_by_text(self, query: str, exact: bool = False) -> List[GameRecord]:
        """
        Search the catalogue by name.

        Parameters
        ----------
        query : Free text typed by the user.
        exact : Request exact-name matching instead of substring matching.

        Raises
        ------
        CatalogError
            On network, HTTP status or parse failure.
        """
        params = {"type": ITEM_TYPE, "query": query}
        if exact:
            params["exact"] = "1"
        return await self._fetch_records("search", params)

    async def lookup_by_id(self, game_id: str) -> List[GameRecord]:
        """
        Fetch catalogue entries by identifier.

        The service may answer with zero or more items for one identifier.
        """
        return await self._fetch_records("thing", {"type": ITEM_TYPE, "id": game_id})

    # ── Private helpers ───────────────────────────────────────────────────────

    def _headers(self) -> Dict[str, str]:
        if not self._config.api_token:
            return {}
        return {"Authorization": f"Bearer {self._config.api_token}"}

    async def _fetch_records(self, endpoint: str, params: Dict[str, str]) -> List[GameRecord]:
        url = f"{self._config.base_url}/{endpoint}"
        logger.debug("GET %s %s", url, params)
        try:
            response = await self._http.get(url, params=params, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise CatalogHTTPError(exc.response.status_code, str(exc.request.url)) from exc
        except httpx.RequestError as exc:
            raise CatalogNetworkError(f"Network error querying catalogue: {exc}") from exc

        records = parse_items(response.text)
        logger.debug("%s returned %d records", endpoint, len(records))
        return records


def parse_items(xml: str) -> List[GameRecord]:
    """
    Turn an ``<items>`` document into GameRecords.

    Raises
    ------
    CatalogParseError
        When the payload has no ``<items>`` root (error pages, empty bodies).
    """
    # The payload is XML, but every tag and attribute read here is lowercase
    # and un-namespaced, which the HTML tree builder keeps intact. Void HTML
    # names such as <image> only lose their text, which is never read.
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
        soup = BeautifulSoup(xml, "html.parser")
    root = soup.find("items")
    if root is None:
        message = soup.find("message")
        detail = message.get_text(strip=True) if message else "missing <items> element"
        raise CatalogParseError(f"Unexpected catalogue response: {detail}")

    records: List[GameRecord] = []
    for item in root.find_all("item"):
        record = _record_from_item(item)
        if record is not None:
            records.append(record)
    return records


def _record_from_item(item: Tag) -> Optional[GameRecord]:
    game_id = (item.get("id") or "").strip()
    name = _primary_name(item)
    if not game_id or not name:
        return None
    return GameRecord(id=game_id, name=name, year=_year(item))


def _primary_name(item: Tag) -> str:
    names = item.find_all("name")
    if not names:
        return ""
    primary = next((n for n in names if n.get("type") == "primary"), names[0])
    return (primary.get("value") or "").strip()


def _year(item: Tag) -> Optional[str]:
    node = item.find("yearpublished")
    if node is None:
        return None
    return (node.get("value") or "").strip() or None
