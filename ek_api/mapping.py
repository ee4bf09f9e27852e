"""Abbildung der weclapp-Antworten auf die internen Schemas.

Für jedes Feld gibt es genau eine Reihenfolge, in der mögliche Feldnamen
ausgewertet werden (Schema-Version ``weclapp-v1``):

=============================  ===============================================
Feld                           Reihenfolge
=============================  ===============================================
Einkaufspreis                  ``price`` → ``amount`` → ``purchasePrice``
Währung Preiseintrag           ``currencyName`` → ``currency`` → Währung der
                               Bezugsquelle
Zeitstempel Preiseintrag       ``startDate`` → ``validFrom`` → 0
Letzter EK (direkt)            ``lastPurchasePrice``
Währung letzter EK             ``lastPurchasePriceCurrency`` → Währung der
                               Bezugsquelle
Zeitstempel letzter EK         ``lastPurchasePriceDate`` → 0
Preisliste Bezugsquelle        ``purchasePrices`` → ``prices``
Warengruppe                    ``articleCategoryId`` → ``categoryId``
Bezugsquellen im Artikel       ``articleSupplySources`` → ``supplySources``
Verkaufspreise                 ``articlePrices`` → ``salesPrices``
=============================  ===============================================

Fehlende oder unbrauchbare Werte werden zu ``None``, es wird nie geworfen.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from . import schemas
from .parsing import parse_decimal, parse_timestamp

SCHEMA_VERSION = "weclapp-v1"

PRICE_FIELDS = ("price", "amount", "purchasePrice")
CURRENCY_FIELDS = ("currencyName", "currency")
PRICE_DATE_FIELDS = ("startDate", "validFrom")
PRICE_LIST_FIELDS = ("purchasePrices", "prices")
CATEGORY_FIELDS = ("articleCategoryId", "categoryId")
SUPPLY_SOURCE_FIELDS = ("articleSupplySources", "supplySources")
SALES_PRICE_FIELDS = ("articlePrices", "salesPrices")


def _first(raw: Mapping[str, Any], fields: Iterable[str]) -> Any:
    for field in fields:
        value = raw.get(field)
        if value is not None and value != "":
            return value
    return None


def _as_id(value: Any) -> str | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    return str(value)


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_list(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, Mapping)]


def map_purchase_price(
    raw: Mapping[str, Any], source: Mapping[str, Any] | None = None
) -> schemas.PurchasePriceEntry | None:
    price = parse_decimal(_first(raw, PRICE_FIELDS))
    if price is None:
        return None
    currency = _first(raw, CURRENCY_FIELDS)
    if currency is None and source is not None:
        currency = _first(source, CURRENCY_FIELDS)
    return schemas.PurchasePriceEntry(
        price=price,
        currency=_as_text(currency),
        timestamp=parse_timestamp(_first(raw, PRICE_DATE_FIELDS)),
    )


def map_supply_source(raw: Mapping[str, Any]) -> schemas.SupplySource:
    last_purchase = None
    last_price = parse_decimal(raw.get("lastPurchasePrice"))
    if last_price is not None:
        currency = raw.get("lastPurchasePriceCurrency") or _first(raw, CURRENCY_FIELDS)
        last_purchase = schemas.PurchasePriceEntry(
            price=last_price,
            currency=_as_text(currency),
            timestamp=parse_timestamp(raw.get("lastPurchasePriceDate")),
        )

    prices = []
    for entry in _as_list(_first(raw, PRICE_LIST_FIELDS)):
        mapped = map_purchase_price(entry, raw)
        if mapped is not None:
            prices.append(mapped)

    return schemas.SupplySource(
        id=_as_id(raw.get("id")),
        article_id=_as_id(raw.get("articleId")),
        last_purchase=last_purchase,
        purchase_prices=prices,
    )


def map_sales_price(raw: Mapping[str, Any]) -> schemas.SalesPrice:
    return schemas.SalesPrice(
        price=parse_decimal(_first(raw, ("price", "amount"))),
        currency=_as_text(_first(raw, CURRENCY_FIELDS)),
    )


def map_article(raw: Mapping[str, Any]) -> schemas.Article:
    supply_sources = None
    embedded = _first(raw, SUPPLY_SOURCE_FIELDS)
    if isinstance(embedded, list):
        supply_sources = [map_supply_source(entry) for entry in _as_list(embedded)]

    return schemas.Article(
        id=_as_id(raw.get("id")),
        article_number=_as_text(raw.get("articleNumber")),
        name=_as_text(raw.get("name")),
        article_type=_as_text(raw.get("articleType")),
        unit_name=_as_text(raw.get("unitName")),
        category_id=_as_id(_first(raw, CATEGORY_FIELDS)),
        sales_prices=[map_sales_price(entry) for entry in _as_list(_first(raw, SALES_PRICE_FIELDS))],
        supply_sources=supply_sources,
        primary_supply_source_id=_as_id(raw.get("primarySupplySourceId")),
    )


def map_categories(raw_categories: Iterable[Any]) -> dict[str, str]:
    categories: dict[str, str] = {}
    for entry in raw_categories:
        if not isinstance(entry, Mapping):
            continue
        category_id = _as_id(entry.get("id"))
        name = _as_text(entry.get("name"))
        if category_id is not None and name is not None:
            categories[category_id] = name
    return categories
