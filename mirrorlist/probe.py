# probe.py -- Measure the transfer rate of a single mirror.
# Written in 2025 by Ruud van Asseldonk

# To the extent possible under law, the author has dedicated all copyright and
# related neighbouring rights to this software to the public domain worldwide.
# See the CC0 dedication at https://creativecommons.org/publicdomain/zero/1.0/.

from __future__ import annotations

import asyncio
import logging
import time

from aiohttp import ClientSession
from aiohttp.client_exceptions import ClientError

from typing import Callable

from .mirrors import UNUSABLE, Mirror, MirrorRate

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


async def rate_mirror(
    http: ClientSession,
    mirror: Mirror,
    probe_path: str,
    *,
    clock: Callable[[], float] = time.monotonic,
) -> MirrorRate:
    """
    Fetch `probe_path` from the mirror, and return the observed transfer rate
    in bytes per second. This never raises for network problems; a mirror
    that we fail to measure gets the UNUSABLE rate, so it sorts last.
    """
    url = mirror.url + probe_path
    logger.debug("Rating %s", url)

    t0 = clock()
    try:
        async with http.get(url) as r:
            r.raise_for_status()

            # Count the body rather than holding on to it, we only need the size.
            size = 0
            async for chunk in r.content.iter_chunked(CHUNK_SIZE):
                size += len(chunk)

            t1 = clock()

    except (ClientError, asyncio.TimeoutError) as exc:
        logger.debug("Failed to rate %s: %r", url, exc)
        return MirrorRate(mirror, UNUSABLE)

    dt_sec = t1 - t0

    # A response that completes faster than the clock can measure is more
    # likely a broken mirror than an infinitely fast one.
    if dt_sec <= 0.0:
        logger.debug("Failed to rate %s: elapsed time %r", url, dt_sec)
        return MirrorRate(mirror, UNUSABLE)

    return MirrorRate(mirror, size / dt_sec)
