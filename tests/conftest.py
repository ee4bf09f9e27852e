"""Pytest configuration and fixtures for the EK export API tests."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from ek_api.cache import CategoryCache
from ek_api.dependencies import Settings, get_category_cache, get_erp_client, get_settings
from ek_api.erp import ERPClient
from ek_api.main import create_app

BASE_URL = "https://erp.example.com/webapp/api/v1"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at a fake weclapp tenant."""
    return Settings(base_url=BASE_URL, api_key="secret-token", product_groups=[])


@pytest.fixture
def category_cache() -> CategoryCache:
    return CategoryCache()


@pytest.fixture
def make_client(settings: Settings, category_cache: CategoryCache) -> Callable[[Handler], TestClient]:
    """Build a TestClient whose ERP calls are answered by ``handler``."""

    def build(handler: Handler) -> TestClient:
        app = create_app()
        transport = httpx.MockTransport(handler)
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_category_cache] = lambda: category_cache
        app.dependency_overrides[get_erp_client] = lambda: ERPClient(
            base_url=settings.base_url,
            api_key=settings.api_key,
            auth_header=settings.auth_header,
            transport=transport,
        )
        return TestClient(app)

    return build
