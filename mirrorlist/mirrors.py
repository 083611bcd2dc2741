# mirrors.py -- Records for mirrors, the mirror status, and measured rates.
# Written in 2025 by Ruud van Asseldonk

# To the extent possible under law, the author has dedicated all copyright and
# related neighbouring rights to this software to the public domain worldwide.
# See the CC0 dedication at https://creativecommons.org/publicdomain/zero/1.0/.

from __future__ import annotations

import math

from typing import NamedTuple, Optional, Tuple


# Rate of a mirror that we could not measure. It sorts below every real rate,
# including a rate of zero.
UNUSABLE = -math.inf


class Mirror(NamedTuple):
    """
    The fields here map directly to those documented at
    <https://archlinux.org/mirrors/status/>. The mirror checker reports null
    for mirrors it has not been able to check, so most fields are optional.
    """

    # Supported transport protocol, e.g. "https", "http", "rsync".
    protocol: str

    # Base repo URL, ends in a slash.
    url: str

    # Country name and code, uppercase code.
    country: str
    country_code: str

    # Last time the mirror was synced, according to the Arch mirror checker.
    # ISO 8601 in UTC, so lexicographic order is chronological order.
    last_sync: Optional[str]

    # Average mirroring delay that the Arch mirror checker observed in seconds.
    delay: Optional[int]

    # Score according to the Arch mirror checker's formula.
    score: Optional[float]

    # Completion, not a percentage, but between 0.0 and 1.0.
    completion_pct: Optional[float]

    # Duration and stddev of the duration that it took the Arch mirror checker
    # to retrieve the `lastsync` file, in seconds.
    duration_stddev: Optional[float]
    duration_avg: Optional[float]


class Status(NamedTuple):
    """
    The envelope of the mirror status document.
    """

    cutoff: int
    check_frequency: int
    num_checks: int
    last_check: str
    version: int
    urls: Tuple[Mirror, ...]


class MirrorRate(NamedTuple):
    """
    A mirror, paired with the transfer rate we measured for it.
    """

    mirror: Mirror

    # Download throughput in bytes per second, or UNUSABLE.
    rate: float

    def is_usable(self) -> bool:
        return self.rate != UNUSABLE

    def __str__(self) -> str:
        if not self.is_usable():
            return "unusable"
        return f"{self.rate / 1e6:6.2f} MB/s"
