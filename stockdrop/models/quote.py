"""Value objects for normalized price data and fetch outcomes.

Plain frozen dataclasses: nothing here talks to the network. Constructors
enforce the record invariants so a malformed upstream payload can never be
turned into a "valid" quote further down the line.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Generic, TypeVar

import pandas as pd

_T = TypeVar("_T")


class SourceKind(str, enum.Enum):
    QUOTE = "quote"
    HISTORICAL_LIGHT = "historical-light"
    HISTORICAL_FULL = "historical-full"
    SCREENER = "screener"
    INTRADAY = "intraday"
    NEWS = "news"
    SEARCH = "search"
    PLACEHOLDER = "placeholder"


class ErrorKind(str, enum.Enum):
    NETWORK_ERROR = "network_error"
    RATE_LIMITED = "rate_limited"
    AUTH_ERROR = "auth_error"
    UPSTREAM_ERROR = "upstream_error"
    PARSE_ERROR = "parse_error"


class NormalizationError(ValueError):
    """Raised when a payload or record cannot become a valid value object."""

    kind = ErrorKind.PARSE_ERROR


class QuoteFetchError(Exception):
    """A classified failure surfaced as an exception (see FetchOutcome.unwrap)."""

    def __init__(self, kind: ErrorKind, detail: str = ""):
        super().__init__(f"{kind.value}: {detail}" if detail else kind.value)
        self.kind = kind
        self.detail = detail


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


@dataclass(frozen=True)
class Quote:
    symbol: str
    price: float
    change: float
    change_percent: float
    as_of: datetime
    source: SourceKind
    name: str | None = None
    open: float | None = None
    day_high: float | None = None
    day_low: float | None = None
    previous_close: float | None = None
    volume: int | None = None

    def __post_init__(self) -> None:
        if not self.symbol:
            raise NormalizationError("quote has no symbol")
        for label in ("price", "change", "change_percent"):
            value = getattr(self, label)
            if value is None or math.isnan(value) or math.isinf(value):
                raise NormalizationError(f"{self.symbol}: {label} is not a finite number")
        if self.price < 0:
            raise NormalizationError(f"{self.symbol}: negative price {self.price}")
        if _sign(self.change) != _sign(self.change_percent):
            raise NormalizationError(
                f"{self.symbol}: change {self.change} and change_percent "
                f"{self.change_percent} disagree in sign"
            )

    @property
    def trend(self) -> str:
        """Return "up", "down" or "neutral" from the signed percentage change."""
        if self.change_percent > 0:
            return "up"
        if self.change_percent < 0:
            return "down"
        return "neutral"


@dataclass(frozen=True)
class HistoricalPoint:
    date: date
    close: float
    open: float | None = None
    high: float | None = None
    low: float | None = None
    volume: int | None = None


@dataclass(frozen=True)
class HistoricalSeries:
    """Ascending, duplicate-free daily closes for one symbol."""

    symbol: str
    source: SourceKind
    points: tuple[HistoricalPoint, ...]

    def __post_init__(self) -> None:
        if not self.points:
            raise NormalizationError(f"{self.symbol}: historical series is empty")
        for prev, cur in zip(self.points, self.points[1:]):
            if cur.date <= prev.date:
                raise NormalizationError(
                    f"{self.symbol}: series not strictly ascending at {cur.date}"
                )

    @property
    def latest(self) -> HistoricalPoint:
        return self.points[-1]

    def to_frame(self) -> pd.DataFrame:
        """Return the series as an OHLCV DataFrame indexed by date.

        Fields missing from light history (open/high/low) come out as NaN.
        """
        df = pd.DataFrame(
            {
                "open": [p.open for p in self.points],
                "high": [p.high for p in self.points],
                "low": [p.low for p in self.points],
                "close": [p.close for p in self.points],
                "volume": [p.volume for p in self.points],
            },
            index=pd.Index([p.date for p in self.points], name="date"),
        )
        return df.apply(pd.to_numeric, errors="coerce")


@dataclass(frozen=True)
class FetchOutcome(Generic[_T]):
    """Tagged result: exactly one of ``value`` or ``error`` is set."""

    value: _T | None = None
    error: ErrorKind | None = None
    detail: str = ""

    def __post_init__(self) -> None:
        if (self.value is None) == (self.error is None):
            raise ValueError("FetchOutcome needs exactly one of value or error")

    @classmethod
    def success(cls, value: Any) -> FetchOutcome:
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, detail: str = "") -> FetchOutcome:
        return cls(error=kind, detail=detail)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> _T:
        """Return the value, or raise QuoteFetchError carrying the error kind."""
        if self.error is not None:
            raise QuoteFetchError(self.error, self.detail)
        return self.value  # type: ignore[return-value]
