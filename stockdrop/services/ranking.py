"""Ranking of quote batches by signed percentage change."""

import enum
from collections.abc import Iterable

from stockdrop.models.quote import Quote


class Direction(str, enum.Enum):
    MAX_GAIN = "gain"
    MAX_DECLINE = "decline"


def _change_pct(q: Quote) -> float:
    return q.change_percent


def select_extreme(quotes: Iterable[Quote], direction: Direction) -> Quote | None:
    """Return the top gainer or top decliner, or None for an empty batch.

    Ties go to the first quote in iteration order (min/max keep the first
    extreme they see). There is no magnitude threshold: a batch with no real
    decliner still yields its least-positive entry for MAX_DECLINE. Symbols
    are not de-duplicated.
    """
    if direction is Direction.MAX_DECLINE:
        return min(quotes, key=_change_pct, default=None)
    return max(quotes, key=_change_pct, default=None)


def rank_by_change(
    quotes: Iterable[Quote],
    direction: Direction,
    limit: int | None = None,
    threshold: float | None = None,
) -> list[Quote]:
    """Return quotes ordered steepest-first for ``direction``.

    ``threshold`` keeps only moves strictly beyond it in the given direction
    (e.g. ``-5.0`` with MAX_DECLINE keeps losers of more than 5 %). The sort is
    stable, so ties keep their input order.
    """
    items = list(quotes)
    if threshold is not None:
        if direction is Direction.MAX_DECLINE:
            items = [q for q in items if q.change_percent < threshold]
        else:
            items = [q for q in items if q.change_percent > threshold]

    items.sort(key=_change_pct, reverse=direction is Direction.MAX_GAIN)
    return items[:limit] if limit is not None else items
