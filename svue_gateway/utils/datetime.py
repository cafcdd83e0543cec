# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for svue-gateway.

Session expiry is carried as an absolute Unix timestamp in milliseconds
inside the session token. These helpers keep every such computation in
UTC and in one place.

Usage:
------
    from svue_gateway.utils.datetime import utc_now_millis, millis_from_now

    expiry = millis_from_now(hours=24)
    if is_expired_millis(expiry):
        ...
"""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.

    Example:
        >>> now = utc_now()
        >>> now.tzinfo
        datetime.timezone.utc
    """
    return datetime.now(timezone.utc)


def to_millis(dt: datetime) -> int:
    """Convert a datetime to a Unix timestamp in milliseconds.

    Naive datetimes are assumed to be UTC.

    Args:
        dt: Datetime to convert.

    Returns:
        Milliseconds since the Unix epoch.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return delta // timedelta(milliseconds=1)


def utc_now_millis() -> int:
    """Get the current time as a Unix timestamp in milliseconds."""
    return to_millis(utc_now())


def millis_from_now(hours: int = 0, minutes: int = 0) -> int:
    """Get a millisecond timestamp the given duration after now.

    Args:
        hours: Number of hours to add.
        minutes: Number of minutes to add.

    Returns:
        Milliseconds since the Unix epoch.
    """
    return to_millis(utc_now() + timedelta(hours=hours, minutes=minutes))


def is_expired_millis(expiry: int) -> bool:
    """Check if a millisecond timestamp has passed.

    The instant itself still counts as valid.

    Args:
        expiry: Absolute expiry in milliseconds since the Unix epoch.

    Returns:
        True if the current time is after ``expiry``.
    """
    return utc_now_millis() > expiry
