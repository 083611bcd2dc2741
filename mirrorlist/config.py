# config.py -- Settings for a mirrorlist run.
# Written in 2025 by Ruud van Asseldonk

# To the extent possible under law, the author has dedicated all copyright and
# related neighbouring rights to this software to the public domain worldwide.
# See the CC0 dedication at https://creativecommons.org/publicdomain/zero/1.0/.

from __future__ import annotations

import aiohttp

from typing import FrozenSet, NamedTuple, Optional


STATUS_URL = "https://archlinux.org/mirrors/status/json/"

# About 120 kB. There is no i686 tree on the official mirrors any more.
PROBE_PATH = "core/os/x86_64/core.db"

# What Pacman expects after the base url in a `Server =` line.
SUFFIX = "$repo/os/$arch"


class Config(NamedTuple):
    status_url: str = STATUS_URL

    # Only mirrors that serve this protocol are considered.
    protocol: str = "https"

    # Uppercase country codes. Empty means any country.
    countries: FrozenSet[str] = frozenset()

    # Number of most recently synced mirrors to probe. None probes all of them.
    limit: Optional[int] = 50

    # Maximum number of probes in flight at the same time.
    max_concurrency: int = 5

    probe_path: str = PROBE_PATH
    suffix: str = SUFFIX

    # Timeouts are in seconds.
    connect_timeout: float = 3.0
    read_timeout: float = 5.0
    total_timeout: float = 30.0

    def client_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=self.total_timeout,
            sock_connect=self.connect_timeout,
            sock_read=self.read_timeout,
        )
