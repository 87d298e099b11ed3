# src/qbuilder/base/values.py
import logging
from datetime import datetime
from enum import Enum
from typing import Any

from .nulls import NullFloat, NullInt, NullString, NullTime

log = logging.getLogger(__name__)


class ValueKind(Enum):
    """The closed set of field value shapes the cursor knows how to filter on."""

    TEXT = "text"
    NUMBER = "number"
    TIME = "time"
    NULL_TEXT = "null_text"
    NULL_NUMBER = "null_number"
    NULL_TIME = "null_time"
    COLLECTION = "collection"
    UNSUPPORTED = "unsupported"


def is_number(value: Any) -> bool:
    """True for int and float values. bool is excluded even though it subclasses int."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_zero_time(value: datetime) -> bool:
    """True for the unset instant (datetime.min wall clock, with or without tzinfo)."""
    return value.replace(tzinfo=None) == datetime.min


def _is_scalar_collection(value: Any) -> bool:
    # Elements must be all text or all numbers; mixed sequences are not filterable.
    if not isinstance(value, (list, tuple)):
        return False
    if all(isinstance(item, str) for item in value):
        return True
    return all(is_number(item) for item in value)


def value_kind(value: Any) -> ValueKind:
    """Maps a field's runtime value onto its ValueKind."""
    if isinstance(value, str):
        return ValueKind.TEXT
    if is_number(value):
        return ValueKind.NUMBER
    if isinstance(value, datetime):
        return ValueKind.TIME
    if isinstance(value, NullString):
        return ValueKind.NULL_TEXT
    if isinstance(value, (NullInt, NullFloat)):
        return ValueKind.NULL_NUMBER
    if isinstance(value, NullTime):
        return ValueKind.NULL_TIME
    if _is_scalar_collection(value):
        return ValueKind.COLLECTION

    log.debug(f"Unsupported filter value type: {type(value).__name__}")
    return ValueKind.UNSUPPORTED
