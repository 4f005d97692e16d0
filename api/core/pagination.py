"""
Query-parameter clamping and list paging shared by the list endpoints.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")


def clamp(value: int | None, *, default: int, minimum: int, maximum: int | None = None) -> int:
    """
    Clamp an optional query value into [minimum, maximum].

    Missing or zero values fall back to `default` (clients send `?limit=0`
    meaning "use the default").
    """
    if not value:
        value = default
    value = max(value, minimum)
    if maximum is not None:
        value = min(value, maximum)
    return value


def page(items: Sequence[T], *, offset: int, limit: int) -> list[T]:
    return list(items[offset : offset + limit])


def has_next(total: int, *, offset: int, limit: int) -> bool:
    return offset + limit < total
