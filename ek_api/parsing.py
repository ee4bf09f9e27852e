"""Normalisierung von Zahlen- und Datumswerten aus der ERP-Antwort.

Preise kommen je nach Endpunkt als Zahl oder als Zeichenkette im deutschen
Format (``"1.234,56"``) an, Zeitstempel als Epoch-Millisekunden oder als
ISO-8601-Zeichenkette. Alle Funktionen liefern bei unbrauchbaren Eingaben
einen leeren Wert und werfen keine Ausnahme.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

# Optionales Währungszeichen bzw. ISO-Code vor oder nach dem Betrag.
_AMOUNT = re.compile(
    r"(?:[A-Za-z]{3}|[€$£¥])?\s*(?P<number>[-+]?[0-9][0-9.,]*)\s*(?:[A-Za-z]{3}|[€$£¥])?"
)


def parse_decimal(value: Any) -> float | None:
    """Wandelt einen Preiswert in eine Zahl um.

    Akzeptiert werden ``int``, ``float``, ``Decimal`` sowie Zeichenketten im
    deutschen (``"1.234,56"``) oder englischen Format (``"1234.56"``),
    optional mit Währungszeichen oder -code davor oder dahinter. Alles andere,
    auch Exponentenschreibweise und unendliche Werte, ergibt ``None``.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        try:
            number = float(value)
        except (OverflowError, ValueError):
            return None
        return number if math.isfinite(number) else None
    if not isinstance(value, str):
        return None

    match = _AMOUNT.fullmatch(value.strip())
    if match is None:
        return None
    text = match.group("number")

    if "," in text and "." in text:
        # Das zuletzt stehende Zeichen ist das Dezimaltrennzeichen.
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif "," in text:
        text = text.replace(",", ".")

    try:
        number = float(Decimal(text))
    except (InvalidOperation, OverflowError):
        return None
    return number if math.isfinite(number) else None


def parse_timestamp(value: Any) -> int:
    """Liefert Epoch-Millisekunden, ``0`` für unbekannte Werte."""

    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if isinstance(value, (int, float)):
        return int(value) if value > 0 else 0
    if isinstance(value, datetime):
        return _datetime_to_ms(value)
    if not isinstance(value, str):
        return 0

    text = value.strip()
    if not text:
        return 0
    if text.isdigit():
        return int(text)
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return 0
    return _datetime_to_ms(parsed)


def timestamp_to_iso(value: int | None) -> str | None:
    if not value or value <= 0:
        return None
    try:
        moment = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _datetime_to_ms(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    millis = int(moment.timestamp() * 1000)
    return millis if millis > 0 else 0
