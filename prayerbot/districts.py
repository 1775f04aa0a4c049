from __future__ import annotations

from typing import Iterable

from .models import District


def _matches(d: District, query: str) -> bool:
    en = d.en.lower()
    return en == query or d.bn == query or query in en or query in d.bn


def resolve(districts: Iterable[District], query: str) -> District | None:
    """First district whose English or Bangla name equals or contains `query`."""
    query = (query or "").strip().lower()
    if not query:
        return None
    return next((d for d in districts if _matches(d, query)), None)


def sample(districts: Iterable[District], limit: int = 10) -> list[str]:
    return [f"{d.bn} ({d.en})" for d, _ in zip(districts, range(limit))]
