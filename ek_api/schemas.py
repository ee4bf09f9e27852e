"""Pydantic-Schemas für ERP-Daten und API-Antworten."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SalesPrice(BaseModel):
    price: float | None = None
    currency: str | None = None


class PurchasePriceEntry(BaseModel):
    """Einzelner Einkaufspreis mit Zeitstempel in Epoch-Millisekunden."""

    price: float
    currency: str | None = None
    timestamp: int = 0


class SupplySource(BaseModel):
    id: str | None = None
    article_id: str | None = None
    last_purchase: PurchasePriceEntry | None = None
    purchase_prices: list[PurchasePriceEntry] = []


class Article(BaseModel):
    id: str | None = None
    article_number: str | None = None
    name: str | None = None
    article_type: str | None = None
    unit_name: str | None = None
    category_id: str | None = None
    sales_prices: list[SalesPrice] = []
    # None: die Bezugsquellen waren nicht in der Artikelantwort enthalten.
    supply_sources: list[SupplySource] | None = None
    primary_supply_source_id: str | None = None


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EnrichedArticle(CamelModel):
    """Flacher Datensatz für den Tabellenimport."""

    article_id: str | None = None
    article_number: str | None = None
    name: str | None = None
    article_type: str | None = None
    unit_name: str | None = None
    category_id: str | None = None
    category_name: str | None = None
    sales_price: float | None = None
    sales_price_currency: str | None = None
    last_purchase_price: float | None = None
    last_purchase_price_currency: str | None = None
    last_purchase_price_date: str | None = None


class ArticleListResponse(CamelModel):
    success: bool = True
    count: int
    items: list[EnrichedArticle]


class ErrorResponse(CamelModel):
    success: bool = False
    message: str
    error: str | None = None
    provider_response: Any = None


class CacheInvalidationResponse(CamelModel):
    success: bool = True
    message: str


class HealthResponse(BaseModel):
    status: str = Field(default="ok")
    configured: bool
