"""REST-Endpunkte für den Artikelexport mit letztem EK."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from .. import schemas
from ..cache import CategoryCache
from ..dependencies import Settings, get_category_cache, get_erp_service, get_settings
from ..erp import ERPError, ERPService

LOGGER = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = {"weclapp"}

router = APIRouter()


def _error_response(status_code: int, message: str, exc: Exception | None = None) -> JSONResponse:
    body = schemas.ErrorResponse(
        message=message,
        error=str(exc) if exc is not None else None,
        provider_response=getattr(exc, "provider_response", None),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def _unknown_provider(provider: str) -> JSONResponse:
    return _error_response(status.HTTP_404_NOT_FOUND, f"Unbekannter Anbieter: {provider}")


@router.get(
    "/{provider}/articles-with-last-ek",
    response_model=schemas.ArticleListResponse,
    responses={404: {"model": schemas.ErrorResponse}, 500: {"model": schemas.ErrorResponse}},
)
async def articles_with_last_ek(
    provider: str,
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, alias="pageSize", ge=1, le=1000),
    group: list[str] | None = Query(default=None),
    settings: Settings = Depends(get_settings),
    service: ERPService = Depends(get_erp_service),
):
    if provider not in SUPPORTED_PROVIDERS:
        return _unknown_provider(provider)

    LOGGER.info("API-Call: /api/%s/articles-with-last-ek", provider)
    try:
        items = await service.build_articles_with_last_ek(
            page=page,
            page_size=page_size or settings.page_size,
            product_groups=group or settings.product_groups,
        )
    except ERPError as exc:
        LOGGER.error(
            "Fehler bei /api/%s/articles-with-last-ek: %s", provider, exc.provider_response or exc
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, f"Fehler beim Laden der Artikel aus {provider}", exc
        )
    except Exception as exc:
        LOGGER.exception("Interner Fehler bei /api/%s/articles-with-last-ek", provider)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, f"Fehler beim Verarbeiten der Artikel aus {provider}", exc
        )

    return schemas.ArticleListResponse(count=len(items), items=items)


@router.post("/{provider}/cache/invalidate", response_model=schemas.CacheInvalidationResponse)
def invalidate_category_cache(provider: str, categories: CategoryCache = Depends(get_category_cache)):
    if provider not in SUPPORTED_PROVIDERS:
        return _unknown_provider(provider)
    categories.invalidate()
    LOGGER.info("Warengruppen-Cache für %s geleert.", provider)
    return schemas.CacheInvalidationResponse(message="Warengruppen-Cache geleert.")
