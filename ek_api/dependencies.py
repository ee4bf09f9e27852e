"""Gemeinsame FastAPI-Dependencies."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from pydantic_settings import BaseSettings, SettingsConfigDict

from .cache import CategoryCache
from .erp import ERPClient, ERPService


class Settings(BaseSettings):
    """Anwendungskonfiguration."""

    base_url: str | None = None
    api_key: str | None = None
    auth_header: str = "AuthenticationToken"
    timeout: float = 30.0
    page_size: int = 1000
    max_concurrency: int = 10
    category_cache_ttl: float | None = None
    product_groups: list[str] = []
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="WECLAPP_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_category_cache() -> CategoryCache:
    return CategoryCache(ttl_seconds=get_settings().category_cache_ttl)


def get_erp_client(settings: Settings = Depends(get_settings)) -> ERPClient:
    return ERPClient(
        base_url=settings.base_url,
        api_key=settings.api_key,
        auth_header=settings.auth_header,
        timeout=settings.timeout,
    )


def get_erp_service(
    settings: Settings = Depends(get_settings),
    client: ERPClient = Depends(get_erp_client),
    categories: CategoryCache = Depends(get_category_cache),
) -> ERPService:
    return ERPService(client, categories, max_concurrency=settings.max_concurrency)
