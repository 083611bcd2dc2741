# selection.py -- Narrow down the mirrors that are worth probing.
# Written in 2025 by Ruud van Asseldonk

# To the extent possible under law, the author has dedicated all copyright and
# related neighbouring rights to this software to the public domain worldwide.
# See the CC0 dedication at https://creativecommons.org/publicdomain/zero/1.0/.

from __future__ import annotations

from typing import AbstractSet, Callable, Iterable, List, Optional, Tuple

from .mirrors import Mirror

Predicate = Callable[[Mirror], bool]


def by_protocol(protocol: str) -> Predicate:
    return lambda m: m.protocol == protocol


def by_country(country_codes: AbstractSet[str]) -> Predicate:
    """Match mirrors in any of the given countries, or all if the set is empty."""
    codes = frozenset(c.upper() for c in country_codes)
    return lambda m: (len(codes) == 0) or (m.country_code.upper() in codes)


def all_of(*predicates: Predicate) -> Predicate:
    return lambda m: all(p(m) for p in predicates)


def freshness_key(m: Mirror) -> Tuple[bool, str]:
    # The timestamps are all ISO 8601 in UTC, so comparing them as strings
    # compares them in time. Mirrors that never synced go last.
    return (m.last_sync is not None, m.last_sync or "")


def select(
    mirrors: Iterable[Mirror],
    predicate: Predicate,
    limit: Optional[int],
) -> List[Mirror]:
    """
    Return the mirrors that satisfy the predicate, most recently synced first,
    at most `limit` of them. Mirrors with the same sync time keep their
    relative order from the input.
    """
    if limit is not None and limit < 0:
        raise ValueError(f"Limit must be non-negative, got {limit}.")

    result = [m for m in mirrors if predicate(m)]

    # Python's sort is stable, also with reverse=True.
    result.sort(key=freshness_key, reverse=True)

    if limit is not None:
        result = result[:limit]

    return result
