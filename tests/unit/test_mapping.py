"""Tests for ek_api.mapping - weclapp payloads to internal schemas."""

from ek_api.mapping import map_article, map_categories, map_purchase_price, map_supply_source


def test_map_article_reads_identifying_fields():
    article = map_article(
        {
            "id": 4711,
            "articleNumber": "MP-100",
            "name": "Mini PC N100",
            "articleType": "STORABLE",
            "unitName": "Stk.",
            "articleCategoryId": 12,
            "articlePrices": [{"price": "100,00", "currencyName": "EUR"}],
            "primarySupplySourceId": "77",
        }
    )

    assert article.id == "4711"
    assert article.article_number == "MP-100"
    assert article.category_id == "12"
    assert article.sales_prices[0].price == 100.0
    assert article.sales_prices[0].currency == "EUR"
    assert article.primary_supply_source_id == "77"
    assert article.supply_sources is None


def test_map_article_with_embedded_supply_sources():
    article = map_article({"id": "1", "articleSupplySources": [{"id": "s1", "lastPurchasePrice": 85}]})

    assert article.supply_sources is not None
    assert article.supply_sources[0].last_purchase.price == 85.0


def test_map_article_tolerates_garbage():
    article = map_article({"articlePrices": "kaputt", "articleSupplySources": [None, 3]})

    assert article.id is None
    assert article.sales_prices == []
    assert article.supply_sources == []


def test_purchase_price_field_fallback_order():
    assert map_purchase_price({"price": "1,50", "amount": 9}).price == 1.5
    assert map_purchase_price({"amount": 9, "purchasePrice": 7}).price == 9.0
    assert map_purchase_price({"purchasePrice": "7"}).price == 7.0
    assert map_purchase_price({"currencyName": "EUR"}) is None


def test_purchase_price_currency_and_date_fallbacks():
    source = {"currencyName": "CHF"}

    own = map_purchase_price({"price": 1, "currencyName": "EUR", "startDate": 500}, source)
    inherited = map_purchase_price({"price": 1, "validFrom": "1970-01-01T00:00:01Z"}, source)
    unknown = map_purchase_price({"price": 1})

    assert (own.currency, own.timestamp) == ("EUR", 500)
    assert (inherited.currency, inherited.timestamp) == ("CHF", 1000)
    assert (unknown.currency, unknown.timestamp) == (None, 0)


def test_map_supply_source_direct_and_nested_prices():
    source = map_supply_source(
        {
            "id": 3,
            "articleId": 4711,
            "currencyName": "EUR",
            "lastPurchasePrice": "85,00",
            "lastPurchasePriceDate": 1700000000000,
            "purchasePrices": [{"price": 80, "startDate": 1600000000000}, {"currencyName": "EUR"}],
        }
    )

    assert source.id == "3"
    assert source.article_id == "4711"
    assert source.last_purchase.price == 85.0
    assert source.last_purchase.currency == "EUR"
    assert source.last_purchase.timestamp == 1700000000000
    assert [entry.price for entry in source.purchase_prices] == [80.0]


def test_map_supply_source_without_direct_price():
    source = map_supply_source({"id": 3, "prices": [{"amount": 12}]})

    assert source.last_purchase is None
    assert source.purchase_prices[0].price == 12.0


def test_map_categories_skips_incomplete_entries():
    categories = map_categories([{"id": 1, "name": "CPU"}, {"id": 2}, {"name": "RAM"}, "x"])
    assert categories == {"1": "CPU"}
