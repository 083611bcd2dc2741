# rank.py -- Order rated mirrors from fastest to slowest.
# Written in 2025 by Ruud van Asseldonk

# To the extent possible under law, the author has dedicated all copyright and
# related neighbouring rights to this software to the public domain worldwide.
# See the CC0 dedication at https://creativecommons.org/publicdomain/zero/1.0/.

from __future__ import annotations

from typing import Iterable, List

from .mirrors import MirrorRate


def rank(rates: Iterable[MirrorRate]) -> List[MirrorRate]:
    """
    Sort by rate, fastest first, unusable mirrors last. Mirrors with equal
    rates keep their relative order, so ranking twice is the same as once.
    """
    return sorted(rates, key=lambda r: r.rate, reverse=True)
