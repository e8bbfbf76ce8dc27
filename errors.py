"""Exceptions raised while validating and storing transactions."""

from typing import Optional


class TransactionError(Exception):
    """Base class for every failure reported by the tracker."""

    message = "Transaction error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class InvalidTransaction(TransactionError, ValueError):
    """Client input was rejected before anything was written."""

    message = "Invalid transaction"


class InvalidAmount(InvalidTransaction):
    message = "Amount must be a number greater than 0"


class EmptyCategory(InvalidTransaction):
    message = "Category must not be empty"


class InvalidType(InvalidTransaction):
    message = "Type must be INCOME or EXPENSE"


class InvalidDate(InvalidTransaction):
    message = "Date is not valid"


class InvalidPayload(InvalidTransaction):
    message = "Request body must be a JSON object"


class InvalidIdentifier(InvalidTransaction):
    message = "Invalid transaction id"


class PersistenceError(TransactionError):
    """The database failed. Callers get a generic message, never the cause."""

    message = "Storage backend failed"


class NotFound(TransactionError):
    message = "Transaction not found"
