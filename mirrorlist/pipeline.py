# pipeline.py -- Go from the mirror status page to a ranked list of mirrors.
# Written in 2025 by Ruud van Asseldonk

# To the extent possible under law, the author has dedicated all copyright and
# related neighbouring rights to this software to the public domain worldwide.
# See the CC0 dedication at https://creativecommons.org/publicdomain/zero/1.0/.

from __future__ import annotations

import functools
import logging

from aiohttp import ClientSession

from typing import Awaitable, Callable, List, Optional

from .config import Config
from .directory import get_status
from .mirrors import Mirror, MirrorRate, Status
from .probe import rate_mirror
from .rank import rank
from .schedule import rate_all
from .selection import all_of, by_country, by_protocol, select

logger = logging.getLogger(__name__)

Fetch = Callable[[ClientSession, str], Awaitable[Status]]
ProbeWithSession = Callable[[ClientSession, Mirror, str], Awaitable[MirrorRate]]


async def select_fastest(
    http: ClientSession,
    config: Config,
    *,
    fetch: Fetch = get_status,
    probe: ProbeWithSession = rate_mirror,
    on_selected: Optional[Callable[[List[Mirror]], None]] = None,
    on_rated: Optional[Callable[[MirrorRate], None]] = None,
) -> List[MirrorRate]:
    """
    Fetch the mirror status, pick the most recently synced mirrors that match
    the config, rate them, and return them fastest first. A DirectoryError
    from the fetch propagates before any mirror is probed.
    """
    status = await fetch(http, config.status_url)
    logger.info("Number of mirrors: %d", len(status.urls))

    predicate = all_of(
        by_protocol(config.protocol),
        by_country(config.countries),
    )
    mirrors = select(status.urls, predicate, config.limit)

    logger.info("%d latest synced %s mirrors:", len(mirrors), config.protocol.upper())
    for i, m in enumerate(mirrors):
        logger.info("%3d %-50s %s", i + 1, m.url, m.last_sync)

    if on_selected is not None:
        on_selected(mirrors)

    logger.info("Rating mirrors ...")
    rates = await rate_all(
        mirrors,
        functools.partial(probe, http, probe_path=config.probe_path),
        max_concurrency=config.max_concurrency,
        on_rated=on_rated,
    )

    rates = rank(rates)
    n_usable = sum(1 for r in rates if r.is_usable())
    logger.info("%d mirrors sorted by rate, %d usable:", len(rates), n_usable)
    for i, r in enumerate(rates):
        logger.info("%3d %-50s %s", i + 1, r.mirror.url, r)

    return rates
