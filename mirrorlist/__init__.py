# mirrorlist -- Select the fastest Arch Linux mirror
# Written in 2025 by Ruud van Asseldonk

# To the extent possible under law, the author has dedicated all copyright and
# related neighbouring rights to this software to the public domain worldwide.
# See the CC0 dedication at https://creativecommons.org/publicdomain/zero/1.0/.

from .config import Config
from .directory import DecodeError, DirectoryError, TransportError, get_status
from .mirrors import UNUSABLE, Mirror, MirrorRate, Status
from .output import format_mirrorlist
from .pipeline import select_fastest
from .probe import rate_mirror
from .rank import rank
from .schedule import rate_all
from .selection import select

__all__ = [
    "Config",
    "DecodeError",
    "DirectoryError",
    "Mirror",
    "MirrorRate",
    "Status",
    "TransportError",
    "UNUSABLE",
    "format_mirrorlist",
    "get_status",
    "rank",
    "rate_all",
    "rate_mirror",
    "select",
    "select_fastest",
]
