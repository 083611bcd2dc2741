import pathlib
import sys

import pytest

# Ensure package root is importable
sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))

from mirrorlist.mirrors import Mirror


def _make_mirror(
    url="https://mirror.example.org/archlinux/",
    *,
    protocol="https",
    country="Netherlands",
    country_code="NL",
    last_sync="2025-06-01T12:00:00Z",
    delay=600,
):
    return Mirror(
        protocol=protocol,
        url=url,
        country=country,
        country_code=country_code,
        last_sync=last_sync,
        delay=delay,
        score=1.5,
        completion_pct=1.0,
        duration_stddev=0.1,
        duration_avg=0.3,
    )


@pytest.fixture
def make_mirror():
    return _make_mirror


def status_record(url, *, protocol="https", country_code="NL", last_sync="2025-06-01T12:00:00Z"):
    """A mirror entry shaped like the ones on archlinux.org/mirrors/status/json/."""
    return {
        "url": url,
        "protocol": protocol,
        "last_sync": last_sync,
        "completion_pct": 1.0,
        "delay": 1234,
        "duration_avg": 0.42,
        "duration_stddev": 0.05,
        "score": 0.9,
        "active": True,
        "country": "Netherlands",
        "country_code": country_code,
        "isos": True,
        "ipv4": True,
        "ipv6": False,
        "details": "https://archlinux.org/mirrors/example/1/",
    }


def status_document(records):
    return {
        "cutoff": 86400,
        "last_check": "2025-06-01T12:34:56.789Z",
        "num_checks": 24,
        "check_frequency": 3600,
        "urls": records,
        "version": 3,
    }


@pytest.fixture
def make_status_document():
    return lambda records: status_document(records)


@pytest.fixture
def make_status_record():
    return status_record
