"""Shared constants for periods and commodity symbols."""

from typing import Literal

# Canonical period type used by the history and commodity chart endpoints.
PeriodType = Literal["1mo", "3mo", "6mo", "1y", "2y", "5y"]

# Calendar days for each period string.
PERIOD_DAYS: dict[str, int] = {
    "1mo": 30,
    "3mo": 90,
    "6mo": 180,
    "1y": 365,
    "2y": 730,
    "5y": 1825,
}

CommodityKind = Literal["gold", "silver", "oil"]

# FMP commodity symbols quoted in USD.
COMMODITY_SYMBOLS: dict[str, str] = {
    "gold": "GCUSD",
    "silver": "SIUSD",
    "oil": "BZUSD",
}

COMMODITY_NAMES: dict[str, str] = {
    "GCUSD": "Gold",
    "SIUSD": "Silver",
    "BZUSD": "Crude Oil",
}
