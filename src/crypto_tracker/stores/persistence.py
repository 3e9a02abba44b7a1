"""Validation and (de)serialization of persisted user state."""
import json
import logging
import math
from decimal import Decimal
from typing import Annotated

from pydantic import Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

PORTFOLIO_KEY = "cryptoPortfolio"
FAVORITES_KEY = "cryptoFavorites"

Quantity = Annotated[float, Field(ge=0, allow_inf_nan=False)]

_portfolio_adapter = TypeAdapter(dict[str, Quantity])
_favorites_adapter = TypeAdapter(list[str])


def parse_number(value: str | float | int | Decimal | None) -> float | None:
    """Parse user input as a finite float; None when it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def format_number(value: float) -> str:
    """Render a number without float noise or trailing zeros (3000.0 -> "3000")."""
    return format(Decimal(repr(value)).normalize(), "f")


def load_portfolio(raw: str | None) -> dict[str, float]:
    """Decode a persisted portfolio; empty on missing, invalid or mis-shaped data."""
    if raw is None:
        return {}
    try:
        return dict(_portfolio_adapter.validate_json(raw, strict=True))
    except ValidationError as exc:
        logger.warning("Discarding stored portfolio: %s", exc.errors(include_url=False))
        return {}


def dump_portfolio(portfolio: dict[str, float]) -> str:
    return json.dumps(portfolio)


def load_favorites(raw: str | None) -> list[str]:
    """Decode persisted favorites, dropping duplicates; empty on invalid data."""
    if raw is None:
        return []
    try:
        favorites = _favorites_adapter.validate_json(raw, strict=True)
    except ValidationError as exc:
        logger.warning("Discarding stored favorites: %s", exc.errors(include_url=False))
        return []
    return list(dict.fromkeys(favorites))


def dump_favorites(favorites: list[str]) -> str:
    return json.dumps(favorites)
