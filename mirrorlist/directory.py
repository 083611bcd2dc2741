# directory.py -- Fetch the list of mirrors from the Arch mirror status page.
# Written in 2025 by Ruud van Asseldonk

# To the extent possible under law, the author has dedicated all copyright and
# related neighbouring rights to this software to the public domain worldwide.
# See the CC0 dedication at https://creativecommons.org/publicdomain/zero/1.0/.

"""
Client for the mirror status document at <https://archlinux.org/mirrors/status/>.

We make a single request and do not retry. The caller gets either a fully
decoded Status, or a DirectoryError that says whether we failed to talk to the
server at all (TransportError), or got a response that we could not make sense
of (DecodeError).
"""

from __future__ import annotations

import asyncio
import json
import logging

from aiohttp import ClientSession
from aiohttp.client_exceptions import ClientError

from typing import Any, Dict, Optional, Tuple, Type, Union

from .mirrors import Mirror, Status

logger = logging.getLogger(__name__)


class DirectoryError(Exception):
    """Failed to obtain the list of mirrors."""


class TransportError(DirectoryError):
    """The request failed, timed out, or returned a non-success status."""


class DecodeError(DirectoryError):
    """The response body is not a valid mirror status document."""


def _field(
    record: Dict[str, Any],
    key: str,
    types: Union[Type[Any], Tuple[Type[Any], ...]],
    *,
    nullable: bool = False,
) -> Any:
    if key not in record:
        raise DecodeError(f"Missing field '{key}'.")

    value = record[key]
    if value is None and nullable:
        return None

    # Json booleans decode to bool, which is a subclass of int in Python.
    if isinstance(value, bool) or not isinstance(value, types):
        raise DecodeError(f"Field '{key}' has unexpected value {value!r}.")

    return value


def _float(record: Dict[str, Any], key: str) -> Optional[float]:
    value = _field(record, key, (int, float), nullable=True)
    return None if value is None else float(value)


def decode_mirror(record: Any) -> Mirror:
    if not isinstance(record, dict):
        raise DecodeError(f"Expected a mirror object, got {record!r}.")

    # The status page carries more fields than we need (active, ipv4, isos,
    # details, ...). We ignore those, so additions do not break us.
    return Mirror(
        protocol=_field(record, "protocol", str),
        url=_field(record, "url", str),
        country=_field(record, "country", str),
        country_code=_field(record, "country_code", str),
        last_sync=_field(record, "last_sync", str, nullable=True),
        delay=_field(record, "delay", int, nullable=True),
        score=_float(record, "score"),
        completion_pct=_float(record, "completion_pct"),
        duration_stddev=_float(record, "duration_stddev"),
        duration_avg=_float(record, "duration_avg"),
    )


def decode_status(data: Any) -> Status:
    """
    Turn the parsed json document into a Status. Raises DecodeError if the
    document does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise DecodeError(f"Expected a json object, got {type(data).__name__}.")

    urls = _field(data, "urls", list)

    return Status(
        cutoff=_field(data, "cutoff", int),
        check_frequency=_field(data, "check_frequency", int),
        num_checks=_field(data, "num_checks", int),
        last_check=_field(data, "last_check", str),
        version=_field(data, "version", int),
        urls=tuple(decode_mirror(record) for record in urls),
    )


async def get_status(http: ClientSession, url: str) -> Status:
    logger.debug("Fetching %s", url)

    try:
        async with http.get(url) as r:
            r.raise_for_status()
            # The body is read inside the context, so a broken connection
            # halfway through counts as a transport error, not a decode error.
            body = await r.read()

    except (ClientError, asyncio.TimeoutError) as exc:
        raise TransportError(f"Failed to fetch {url}: {exc!r}") from exc

    try:
        data = json.loads(body)
    except ValueError as exc:
        raise DecodeError(f"Response from {url} is not valid json: {exc}") from exc

    return decode_status(data)
