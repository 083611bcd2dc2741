# output.py -- Render ranked mirrors as a Pacman mirrorlist.
# Written in 2025 by Ruud van Asseldonk

# To the extent possible under law, the author has dedicated all copyright and
# related neighbouring rights to this software to the public domain worldwide.
# See the CC0 dedication at https://creativecommons.org/publicdomain/zero/1.0/.

from __future__ import annotations

from typing import Iterable, List

from .config import SUFFIX
from .mirrors import MirrorRate


def format_mirrorlist(
    rates: Iterable[MirrorRate],
    suffix: str = SUFFIX,
    *,
    comments: bool = False,
    exclude_unusable: bool = False,
) -> str:
    lines: List[str] = []

    for r in rates:
        if exclude_unusable and not r.is_usable():
            continue

        if comments:
            if r.is_usable():
                lines.append(f"# {r.rate / 1e6:>4.1f} MB/s, {r.mirror.country_code}")
            else:
                lines.append(f"# unusable, {r.mirror.country_code}")

        lines.append(f"Server = {r.mirror.url}{suffix}")

    return "".join(line + "\n" for line in lines)
