"""Zwischenspeicher für die Warengruppen-Namen."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable

LOGGER = logging.getLogger(__name__)

CategoryLoader = Callable[[], Awaitable[dict[str, str]]]


class CategoryCache:
    """Hält die Zuordnung Warengruppen-ID → Name im Speicher.

    Ohne ``ttl_seconds`` gilt der Inhalt bis zum Neustart oder bis zum Aufruf
    von :meth:`invalidate`. Fehlgeschlagene Ladevorgänge werden nicht
    gespeichert.
    """

    def __init__(self, ttl_seconds: float | None = None, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._categories: dict[str, str] | None = None
        self._loaded_at = 0.0

    @property
    def is_loaded(self) -> bool:
        if self._categories is None:
            return False
        if self.ttl_seconds is None:
            return True
        return self._clock() - self._loaded_at < self.ttl_seconds

    async def get(self, loader: CategoryLoader) -> dict[str, str]:
        if self.is_loaded:
            return self._categories  # type: ignore[return-value]
        categories = await loader()
        self._categories = categories
        self._loaded_at = self._clock()
        LOGGER.info("%d Warengruppen in den Cache geladen.", len(categories))
        return categories

    def invalidate(self) -> None:
        self._categories = None
        self._loaded_at = 0.0
