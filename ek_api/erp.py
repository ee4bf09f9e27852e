"""ERP-Integration: Abruf der Artikel und Ermittlung des letzten EK."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

import httpx

from . import mapping, schemas
from .cache import CategoryCache
from .enrichment import resolve

LOGGER = logging.getLogger(__name__)


class ERPError(RuntimeError):
    """Basisausnahme für die ERP-Kommunikation."""

    def __init__(self, message: str, provider_response: Any = None) -> None:
        super().__init__(message)
        self.provider_response = provider_response


class ERPConfigurationError(ERPError):
    """Basis-URL oder API-Token fehlen."""


class ERPRequestError(ERPError):
    """Netzwerkfehler oder Antwort mit Fehlerstatus."""

    def __init__(self, message: str, status_code: int | None = None, provider_response: Any = None) -> None:
        super().__init__(message, provider_response)
        self.status_code = status_code


class ERPResponseError(ERPError):
    """Antwort mit unerwarteter Struktur."""


class ERPClient:
    """Asynchrone Kommunikation mit der weclapp-REST-API.

    Der Client wird als ``async with``-Block verwendet, damit alle Abrufe
    einer Anfrage dieselbe Verbindung nutzen.
    """

    def __init__(
        self,
        base_url: str | None,
        api_key: str | None = None,
        auth_header: str = "AuthenticationToken",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") if base_url else None
        self.api_key = api_key
        self.auth_header = auth_header
        self.timeout = timeout
        self.transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.api_key)

    async def __aenter__(self) -> ERPClient:
        if not self.is_configured:
            raise ERPConfigurationError("WECLAPP_BASE_URL oder WECLAPP_API_KEY ist nicht gesetzt.")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._build_headers(),
            transport=self.transport,
        )
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_articles(
        self, page: int = 1, page_size: int = 1000, properties: Iterable[str] | None = None
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"page": page, "pageSize": page_size}
        if properties:
            params["properties"] = ",".join(properties)
        return await self._get_list("/article", params)

    async def fetch_supply_sources(self, article_id: str) -> list[dict[str, Any]]:
        return await self._get_list("/articleSupplySource", {"articleId-eq": article_id})

    async def fetch_categories(self) -> list[dict[str, Any]]:
        return await self._get_list("/articleCategory", {"page": 1, "pageSize": 1000})

    async def _get_list(self, path: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        if self._client is None:
            raise ERPConfigurationError("ERPClient muss mit 'async with' geöffnet werden.")
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ERPRequestError(
                f"ERP antwortete mit Status {exc.response.status_code} für {path}",
                status_code=exc.response.status_code,
                provider_response=_response_body(exc.response),
            ) from exc
        except httpx.HTTPError as exc:
            raise ERPRequestError(f"ERP nicht erreichbar ({path}): {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ERPResponseError(f"Ungültiges JSON vom ERP ({path})", response.text) from exc

        if isinstance(payload, dict):
            records = payload.get("result", payload.get("data"))
        else:
            records = payload
        if not isinstance(records, list):
            raise ERPResponseError(f"Ungültige ERP-Antwortstruktur ({path})", payload)
        return [record for record in records if isinstance(record, dict)]

    def _build_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.api_key:
            if self.auth_header.lower() == "authorization":
                headers["Authorization"] = f"Bearer {self.api_key}"
            else:
                headers[self.auth_header] = self.api_key
        return headers


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


class ERPService:
    """Geschäftslogik für den Artikelexport mit letztem EK."""

    def __init__(self, client: ERPClient, categories: CategoryCache, max_concurrency: int = 10) -> None:
        self.client = client
        self.categories = categories
        self.max_concurrency = max(1, max_concurrency)

    async def load_categories(self) -> dict[str, str]:
        return mapping.map_categories(await self.client.fetch_categories())

    async def attach_supply_sources(self, article: schemas.Article, semaphore: asyncio.Semaphore) -> None:
        if article.supply_sources is not None:
            return
        if not article.id:
            article.supply_sources = []
            return
        async with semaphore:
            try:
                raw_sources = await self.client.fetch_supply_sources(article.id)
                article.supply_sources = [mapping.map_supply_source(raw) for raw in raw_sources]
            except ERPError as exc:
                LOGGER.warning("Bezugsquellen für Artikel %s nicht abrufbar: %s", article.id, exc)
                article.supply_sources = []
            except Exception as exc:
                LOGGER.warning("Bezugsquellen für Artikel %s nicht verarbeitbar: %r", article.id, exc)
                article.supply_sources = []

    async def build_articles_with_last_ek(
        self,
        page: int = 1,
        page_size: int = 1000,
        product_groups: Iterable[str] = (),
    ) -> list[schemas.EnrichedArticle]:
        async with self.client:
            raw_articles = await self.client.fetch_articles(page=page, page_size=page_size)
            category_map = await self.categories.get(self.load_categories)
            LOGGER.info("%d Artikel vom ERP erhalten.", len(raw_articles))

            articles = [mapping.map_article(raw) for raw in raw_articles]
            groups = set(product_groups)
            if groups:
                articles = [article for article in articles if category_map.get(article.category_id or "") in groups]

            semaphore = asyncio.Semaphore(self.max_concurrency)
            await asyncio.gather(*(self.attach_supply_sources(article, semaphore) for article in articles))

        return [resolve(article, category_map) for article in articles]
