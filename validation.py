"""
validation.py
-------------
Checks a raw transaction candidate (form fields or a JSON body) before it
is allowed anywhere near the database.

Rules run in a fixed order and the first one that fails decides the
rejection, so a record is either accepted whole or rejected with exactly
one reason.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any, Mapping, Optional

from database import TRANSACTION_TYPES, TransactionType
from errors import EmptyCategory, InvalidAmount, InvalidDate, InvalidIdentifier, InvalidType

DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
POSITIVE_ID = re.compile(r"^[0-9]+$")
# largest value a signed 64-bit INTEGER primary key can hold
MAX_ID = 2**63 - 1


@dataclass(frozen=True)
class ValidTransaction:
    amount: float
    category: str
    note: str
    type: TransactionType
    date: datetime  # timezone-aware, UTC


def parse_amount(value: Any) -> float:
    # bool is an int subclass; True must not become an amount of 1
    if value is None or isinstance(value, bool):
        raise InvalidAmount()
    # float() would accept digit separators like "1_000"
    if isinstance(value, str) and "_" in value:
        raise InvalidAmount()
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidAmount() from None
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmount()
    return amount


def parse_category(value: Any) -> str:
    category = "" if value is None else str(value).strip()
    if not category:
        raise EmptyCategory()
    return category


def parse_type(value: Any) -> TransactionType:
    if isinstance(value, TransactionType):
        return value
    if not isinstance(value, str) or value not in TRANSACTION_TYPES:
        raise InvalidType()
    return TransactionType(value)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_date(value: Any, now: Optional[datetime] = None) -> datetime:
    """Parse the event date, defaulting to ``now`` when nothing was given.

    Date-only strings mean midnight UTC and strings without an offset are
    read as UTC.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return _as_utc(now or datetime.now(timezone.utc))

    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if not isinstance(value, (str, datetime)):
        raise InvalidDate()

    # converting an offset near year 1 or 9999 to UTC can leave the datetime range
    try:
        if isinstance(value, datetime):
            return _as_utc(value)
        text = value.strip()
        if DATE_ONLY.match(text):
            return datetime.combine(date.fromisoformat(text), time.min, tzinfo=timezone.utc)
        return _as_utc(datetime.fromisoformat(text))
    except (ValueError, OverflowError):
        raise InvalidDate() from None


def parse_note(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def validate_transaction(payload: Mapping[str, Any], now: Optional[datetime] = None) -> ValidTransaction:
    """Validate and normalize a candidate transaction.

    Args:
        payload: Mapping with ``amount``, ``category``, ``type`` and the
            optional ``note`` and ``date``.
        now: Timestamp used when no date is supplied. Defaults to the
            current UTC time.

    Returns:
        The normalized record.

    Raises:
        InvalidAmount, EmptyCategory, InvalidType, InvalidDate: for the
            first rule the payload breaks.
    """
    amount = parse_amount(payload.get("amount"))
    category = parse_category(payload.get("category"))
    txn_type = parse_type(payload.get("type"))
    when = parse_date(payload.get("date"), now=now)
    note = parse_note(payload.get("note"))

    return ValidTransaction(amount=amount, category=category, note=note, type=txn_type, date=when)


def parse_transaction_id(value: Any) -> int:
    """Parse a path identifier; only positive integers are accepted."""
    if isinstance(value, bool):
        raise InvalidIdentifier()
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and POSITIVE_ID.match(value.strip()):
        parsed = int(value.strip())
    else:
        raise InvalidIdentifier()
    if parsed <= 0 or parsed > MAX_ID:
        raise InvalidIdentifier()
    return parsed
