"""
Firestore query and document helpers.

NOTE: For firebase_admin SDK, we use positional arguments for where().
The keyword filter API only changes the deprecation warning, not behaviour.
"""

from datetime import datetime, timezone
from typing import Any, Dict
import logging

logger = logging.getLogger(__name__)


def where_filter(query, field_path: str, op_string: str, value):
    """
    Helper function for Firestore queries.

    Usage:
        query = where_filter(collection, "userId", "==", uid)
    """
    return query.where(field_path, op_string, value)


def to_datetime(value: Any) -> datetime:
    """
    Convert a Firestore timestamp value to an aware datetime.

    Firestore returns DatetimeWithNanoseconds (a datetime subclass); older
    records may carry a Timestamp-like object or an epoch in milliseconds.
    """
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if hasattr(value, "to_datetime"):
        return value.to_datetime()
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    logger.warning(f"Unknown timestamp type: {type(value)}, using current time")
    return datetime.now(timezone.utc)


def snapshot_to_dict(doc) -> Dict[str, Any]:
    """Flatten a document snapshot into a dict carrying its id."""
    data = doc.to_dict() or {}
    data["id"] = doc.id
    return data
