"""Mapping between stored transactions and their JSON wire shape.

Reads are lenient: a stored ``type`` outside the known vocabulary is served
as EXPENSE unless strict mode is on. Writes are strict and always pass
through validation first.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel

from config import get_settings
from database import TRANSACTION_TYPES, TransactionType
from errors import InvalidPayload, InvalidType
from logger import get_logger
from validation import validate_transaction

logger = get_logger()


class TransactionOut(BaseModel):
    id: int
    amount: float
    category: str
    note: str
    type: TransactionType
    date: str


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. 2024-01-01T00:00:00.000Z."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


def coerce_type(value: Any, strict: bool = False) -> TransactionType:
    if value in TRANSACTION_TYPES:
        return TransactionType(value)
    if strict:
        raise InvalidType(f"Stored transaction has unknown type {value!r}")
    logger.warning("Unknown stored transaction type %r, serving as EXPENSE", value)
    return TransactionType.EXPENSE


def serialize(record: Any, strict: Optional[bool] = None) -> TransactionOut:
    """Convert a stored transaction row into its wire model."""
    if strict is None:
        strict = get_settings().strict_types
    return TransactionOut(
        id=record.id,
        amount=record.amount,
        category=record.category,
        note=record.note or "",
        type=coerce_type(record.type, strict=strict),
        date=format_timestamp(record.date),
    )


def to_record(payload: Any, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Validate a creation request and return the fields to store.

    Raises:
        InvalidPayload: if the payload is not a mapping.
        InvalidTransaction: if the payload fails validation.
    """
    if not isinstance(payload, Mapping):
        raise InvalidPayload()
    valid = validate_transaction(payload, now=now)
    return {
        "amount": valid.amount,
        "category": valid.category,
        "note": valid.note,
        "type": valid.type.value,
        # stored naive, in UTC
        "date": valid.date.replace(tzinfo=None),
    }
