"""
Time Zone Conversion - Local wall clock to UTC.

Every trigger instant that leaves the scheduling layer is UTC.
This module is the one place where a local exchange or schedule time is
pinned to a zone and converted.

DST policy (lenient):
- Ambiguous wall times (fall back) resolve to the earlier instant
- Non-existent wall times (spring forward) are shifted forward by the gap
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

# Canonical zones - defined once, used everywhere
ET = ZoneInfo("America/New_York")
UTC = timezone.utc


def resolve_zone(zone: tzinfo | str) -> tzinfo:
    """
    Resolve a zone name or tzinfo into a tzinfo.

    Raises:
        ZoneInfoNotFoundError: if the IANA name is unknown
    """
    if isinstance(zone, str):
        return ZoneInfo(zone)
    return zone


def convert_to_utc(local: datetime, zone: tzinfo | str) -> datetime:
    """
    Convert a local wall-clock datetime in `zone` to an aware UTC datetime.

    Naive datetimes are interpreted in `zone` with fold=0, which gives the
    earlier instant for ambiguous times and the pre-transition offset for
    skipped times (i.e. 02:30 on a spring-forward day lands on 03:30 local).
    Aware datetimes are converted as-is.
    """
    if local.tzinfo is not None:
        return local.astimezone(UTC)

    return local.replace(tzinfo=resolve_zone(zone), fold=0).astimezone(UTC)


def as_utc(instant: datetime) -> datetime:
    """Normalize an instant to aware UTC (naive values are assumed UTC)."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=UTC)
    return instant.astimezone(UTC)


def as_naive_utc(instant: datetime) -> datetime:
    """Normalize an instant to naive UTC (naive values are returned unchanged)."""
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(UTC).replace(tzinfo=None)
