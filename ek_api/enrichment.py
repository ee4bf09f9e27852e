"""Ermittlung des letzten Einkaufspreises und Aufbereitung der Artikeldaten."""

from __future__ import annotations

from collections.abc import Mapping

from . import schemas
from .parsing import timestamp_to_iso


def collect_candidates(article: schemas.Article) -> list[schemas.PurchasePriceEntry]:
    """Sammelt alle EK-Kandidaten eines Artikels in Quellenreihenfolge.

    Ist eine Hauptbezugsquelle gesetzt und vorhanden, wird nur sie
    berücksichtigt. Pro Quelle steht der direkte letzte EK vor den Einträgen
    der Preisliste; Preislisteneinträge mit Preis 0 entfallen.
    """

    sources = article.supply_sources or []
    if article.primary_supply_source_id:
        primary = [source for source in sources if source.id == article.primary_supply_source_id]
        if primary:
            sources = primary[:1]

    candidates: list[schemas.PurchasePriceEntry] = []
    for source in sources:
        if source.last_purchase is not None:
            candidates.append(source.last_purchase)
        candidates.extend(entry for entry in source.purchase_prices if entry.price != 0)
    return candidates


def select_latest(candidates: list[schemas.PurchasePriceEntry]) -> schemas.PurchasePriceEntry | None:
    if not candidates:
        return None
    # sorted() ist stabil: bei gleichem Zeitstempel gewinnt der erste Kandidat.
    return sorted(candidates, key=lambda entry: entry.timestamp, reverse=True)[0]


def resolve(article: schemas.Article, category_map: Mapping[str, str]) -> schemas.EnrichedArticle:
    sales = article.sales_prices[0] if article.sales_prices else schemas.SalesPrice()
    latest = select_latest(collect_candidates(article))
    category_name = category_map.get(article.category_id) if article.category_id else None

    return schemas.EnrichedArticle(
        article_id=article.id,
        article_number=article.article_number,
        name=article.name,
        article_type=article.article_type,
        unit_name=article.unit_name,
        category_id=article.category_id,
        category_name=category_name,
        sales_price=sales.price,
        sales_price_currency=sales.currency,
        last_purchase_price=latest.price if latest else None,
        last_purchase_price_currency=latest.currency if latest else None,
        last_purchase_price_date=timestamp_to_iso(latest.timestamp) if latest else None,
    )
