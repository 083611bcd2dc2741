# cli.py -- Command line interface for mirrorlist.
# Written in 2025 by Ruud van Asseldonk

# To the extent possible under law, the author has dedicated all copyright and
# related neighbouring rights to this software to the public domain worldwide.
# See the CC0 dedication at https://creativecommons.org/publicdomain/zero/1.0/.

"""
Select the fastest, most up to date Arch Linux mirrors.

Fetches the mirror status from archlinux.org, takes the most recently synced
mirrors, downloads a small file from each of them, and prints a mirrorlist
with the fastest mirror first. Progress goes to stderr, prefixed with '# ',
so it is safe to redirect stdout straight into /etc/pacman.d/mirrorlist.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

import aiohttp

from tqdm import tqdm

from typing import List, Optional

from .config import Config, PROBE_PATH, STATUS_URL, SUFFIX
from .directory import DecodeError, DirectoryError, TransportError
from .mirrors import Mirror, MirrorRate
from .output import format_mirrorlist
from .pipeline import select_fastest

logger = logging.getLogger(__name__)

DEFAULTS = Config()


def positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def positive_float(value: str) -> float:
    x = float(value)
    if x <= 0.0:
        raise argparse.ArgumentTypeError(f"must be positive, got {x}")
    return x


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mirrorlist",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--protocol",
        default=DEFAULTS.protocol,
        help="only consider mirrors with this protocol (default: %(default)s)",
    )
    parser.add_argument(
        "--country",
        action="append",
        default=[],
        metavar="CODE",
        help="only consider mirrors in this country, can be repeated (default: any)",
    )
    parser.add_argument(
        "--limit",
        type=positive_int,
        default=DEFAULTS.limit,
        help="number of most recently synced mirrors to rate (default: %(default)s)",
    )
    parser.add_argument(
        "--concurrency",
        type=positive_int,
        default=DEFAULTS.max_concurrency,
        help="maximum number of mirrors to rate at once (default: %(default)s)",
    )
    parser.add_argument(
        "--probe-path",
        default=PROBE_PATH,
        help="file to download from every mirror, relative to its base url "
        "(default: %(default)s)",
    )
    parser.add_argument(
        "--status-url",
        default=STATUS_URL,
        help="mirror status json to fetch (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout",
        type=positive_float,
        default=DEFAULTS.total_timeout,
        metavar="SECONDS",
        help="give up on a single request after this long (default: %(default)s)",
    )
    parser.add_argument(
        "--output",
        "-o",
        metavar="FILE",
        help="write the mirrorlist here instead of to stdout",
    )
    parser.add_argument(
        "--comments",
        action="store_true",
        help="precede every server line with a comment with its rate",
    )
    parser.add_argument(
        "--exclude-unusable",
        action="store_true",
        help="leave mirrors that could not be rated out of the mirrorlist",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true")
    verbosity.add_argument("--quiet", "-q", action="store_true")
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    return Config(
        status_url=args.status_url,
        protocol=args.protocol,
        countries=frozenset(c.upper() for c in args.country),
        limit=args.limit,
        max_concurrency=args.concurrency,
        probe_path=args.probe_path,
        suffix=SUFFIX,
        total_timeout=args.timeout,
    )


def configure_logging(*, verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    # Prefix everything with '# ', so the log is a valid mirrorlist comment.
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="# %(message)s",
        force=True,
    )


def make_connector() -> aiohttp.TCPConnector:
    return aiohttp.TCPConnector(
        # Cache DNS lookups forever; we want to measure the speed of the mirror,
        # not of our DNS server.
        use_dns_cache=True,
        ttl_dns_cache=None,
        # The scheduler is the only limit on concurrent requests. A per host
        # limit here would make mirrors on the same host wait for each other,
        # and that wait would count as transfer time.
        limit=0,
    )


async def run(config: Config, *, progress: bool) -> List[MirrorRate]:
    connector = make_connector()
    timeout = config.client_timeout()

    with tqdm(desc="Rating", unit="mirror", file=sys.stderr, disable=not progress) as bar:

        def on_selected(mirrors: List[Mirror]) -> None:
            bar.reset(total=len(mirrors))

        def on_rated(_rate: MirrorRate) -> None:
            bar.update(1)

        async with aiohttp.ClientSession(connector=connector, timeout=timeout) as http:
            return await select_fastest(
                http,
                config,
                on_selected=on_selected,
                on_rated=on_rated,
            )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)
    config = config_from_args(args)

    logger.info("mirrorlist started")

    try:
        rates = asyncio.run(run(config, progress=not args.quiet))

    except TransportError as exc:
        logger.error("Error: could not reach the mirror status page: %s", exc)
        return 1

    except DecodeError as exc:
        logger.error("Error: could not decode the mirror status: %s", exc)
        return 1

    except DirectoryError as exc:
        logger.error("Error: %s", exc)
        return 1

    mirrorlist = format_mirrorlist(
        rates,
        config.suffix,
        comments=args.comments,
        exclude_unusable=args.exclude_unusable,
    )

    if args.output is None:
        sys.stdout.write(mirrorlist)
    else:
        logger.info("Writing mirrorlist to %s", args.output)
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(mirrorlist)
        except OSError as exc:
            logger.error("Error: could not write %s: %s", args.output, exc)
            return 1

    return 0
