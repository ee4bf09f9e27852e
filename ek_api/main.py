"""Einstiegspunkt für die FastAPI-Anwendung."""

from __future__ import annotations

import logging
import os

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import schemas
from .api import api_router
from .dependencies import Settings, get_settings

LOGGER = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Erzeugt und konfiguriert die FastAPI-Anwendung."""

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if not settings.base_url or not settings.api_key:
        LOGGER.warning("WECLAPP_BASE_URL oder WECLAPP_API_KEY fehlt. Anfragen an das ERP schlagen fehl.")

    app = FastAPI(title="Weclapp EK API", version="1.0.0")

    # Power Query und Browser-Clients greifen von beliebigen Ursprüngen zu.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=schemas.HealthResponse, tags=["System"])
    def health(current: Settings = Depends(get_settings)) -> schemas.HealthResponse:
        return schemas.HealthResponse(configured=bool(current.base_url and current.api_key))

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


def run() -> None:
    port = int(os.getenv("PORT", "3000"))
    LOGGER.info("Weclapp EK API läuft auf Port %d", port)
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    run()
