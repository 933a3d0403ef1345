# photofeed/utils/datetime_utils.py
"""
Shared timestamp handling for documents written to and read from Firestore.

Every timestamp the service produces is timezone-aware UTC; clients convert to local time.
"""

import logging
from datetime import datetime, date, timezone, time
from typing import Any

logger = logging.getLogger(__name__)


class DateTimeUtils:
    """Timestamp helpers used by the stores."""

    @staticmethod
    def now() -> datetime:
        """Current time as a UTC timezone-aware datetime."""
        return datetime.now(timezone.utc)

    @staticmethod
    def to_iso_string(dt: datetime) -> str:
        """datetime -> ISO 8601 string with a `Z` suffix."""
        try:
            if dt.tzinfo is None:
                dt = dt.replace(tzinfo=timezone.utc)
            else:
                dt = dt.astimezone(timezone.utc)
            return dt.isoformat().replace('+00:00', 'Z')
        except Exception as e:
            logger.error(f"ISO string conversion failed: {dt} - {e}")
            raise ValueError(f"Cannot convert to ISO string: {dt}")

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """
        Prepares a value for a Firestore write.

        - date -> datetime at 00:00:00 UTC
        - naive datetime -> UTC-aware datetime
        - dicts and lists are converted recursively
        """
        if isinstance(obj, datetime):
            if obj.tzinfo is None:
                return obj.replace(tzinfo=timezone.utc)
            return obj.astimezone(timezone.utc)

        elif isinstance(obj, date):
            return datetime.combine(obj, time.min).replace(tzinfo=timezone.utc)

        elif isinstance(obj, dict):
            return {k: DateTimeUtils.for_firestore(v) for k, v in obj.items()}

        elif isinstance(obj, list):
            return [DateTimeUtils.for_firestore(item) for item in obj]

        return obj

    @staticmethod
    def from_firestore(obj: Any) -> Any:
        """
        Normalizes a value read from Firestore.

        Firestore returns `DatetimeWithNanoseconds` (a datetime subclass); every datetime is
        returned as a plain UTC-aware datetime. dicts and lists are converted recursively.
        """
        if isinstance(obj, datetime):
            if obj.tzinfo is None:
                obj = obj.replace(tzinfo=timezone.utc)
            obj = obj.astimezone(timezone.utc)
            return datetime(obj.year, obj.month, obj.day, obj.hour, obj.minute, obj.second,
                            obj.microsecond, tzinfo=timezone.utc)

        elif isinstance(obj, dict):
            return {k: DateTimeUtils.from_firestore(v) for k, v in obj.items()}

        elif isinstance(obj, list):
            return [DateTimeUtils.from_firestore(item) for item in obj]

        return obj


# Module-level shortcuts
def now() -> datetime:
    return DateTimeUtils.now()


def to_iso(dt: datetime) -> str:
    return DateTimeUtils.to_iso_string(dt)


def for_firestore(obj: Any) -> Any:
    return DateTimeUtils.for_firestore(obj)


def from_firestore(obj: Any) -> Any:
    return DateTimeUtils.from_firestore(obj)
