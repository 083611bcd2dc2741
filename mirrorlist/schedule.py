# schedule.py -- Rate many mirrors concurrently, with a cap on concurrency.
# Written in 2025 by Ruud van Asseldonk

# To the extent possible under law, the author has dedicated all copyright and
# related neighbouring rights to this software to the public domain worldwide.
# See the CC0 dedication at https://creativecommons.org/publicdomain/zero/1.0/.

"""
Every mirror gets its own task right away, and the tasks queue up on a
semaphore before they touch the network. This way we never have more than
`max_concurrency` requests in flight, which would hammer the mirrors and
saturate our own link, which in turn would make the measurements meaningless.
"""

from __future__ import annotations

import asyncio

from typing import Awaitable, Callable, List, Optional, Sequence

from .mirrors import Mirror, MirrorRate

Probe = Callable[[Mirror], Awaitable[MirrorRate]]


async def rate_all(
    mirrors: Sequence[Mirror],
    probe: Probe,
    *,
    max_concurrency: int,
    on_rated: Optional[Callable[[MirrorRate], None]] = None,
) -> List[MirrorRate]:
    """
    Probe all mirrors and return one rate per mirror, in the order in which
    the probes completed.
    """
    if max_concurrency < 1:
        raise ValueError(f"Concurrency must be at least 1, got {max_concurrency}.")

    gate = asyncio.Semaphore(max_concurrency)

    # All tasks run on the same event loop, so appending needs no lock.
    rates: List[MirrorRate] = []

    async def rate_one(mirror: Mirror) -> None:
        async with gate:
            rate = await probe(mirror)
        rates.append(rate)
        if on_rated is not None:
            on_rated(rate)

    async with asyncio.TaskGroup() as tg:
        for m in mirrors:
            tg.create_task(rate_one(m))

    assert len(rates) == len(mirrors), "Must have exactly one rate per mirror."
    return rates
