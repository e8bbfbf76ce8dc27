"""
store.py
--------
State container behind the dashboard.

The page renders from ``TransactionStore.state`` and changes it only
through the actions below. The list and totals are replaced after the
database confirms a write, so a failed request leaves them untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from aggregation import Totals, compute_totals
from database import TransactionType
from errors import InvalidTransaction, NotFound, PersistenceError
from logger import get_logger
from repository import create_transaction, delete_transaction, list_transactions
from serialization import TransactionOut, serialize, to_record

logger = get_logger()

LOAD_FAILED = "Could not load transactions, please try again later"
SAVE_FAILED = "Could not save, please try again later"
DELETE_FAILED = "Could not delete, please try again later"


@dataclass
class FormState:
    amount: str = ""
    category: str = ""
    note: str = ""
    date: str = field(default_factory=lambda: date.today().isoformat())
    type: TransactionType = TransactionType.EXPENSE

    def as_payload(self) -> dict:
        return {
            "amount": self.amount,
            "category": self.category,
            "note": self.note,
            "date": self.date,
            "type": self.type,
        }


@dataclass
class DashboardState:
    transactions: List[TransactionOut] = field(default_factory=list)
    totals: Totals = field(default_factory=Totals)
    form: FormState = field(default_factory=FormState)
    error: Optional[str] = None
    is_submitting: bool = False
    # bumped on reset so the page can key fresh, empty widgets
    form_version: int = 0


class TransactionStore:
    """Owns the dashboard state and the operations allowed on it.

    Args:
        session_factory: Callable returning a new SQLAlchemy session, e.g.
            ``database.SessionLocal``. One session is opened per action.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
        self._state = DashboardState()

    @property
    def state(self) -> DashboardState:
        return self._state

    def _set(self, **changes) -> None:
        self._state = replace(self._state, **changes)

    def _set_transactions(self, transactions: List[TransactionOut]) -> None:
        self._set(transactions=transactions, totals=compute_totals(transactions))

    def load(self) -> bool:
        try:
            with self._session_factory() as db:
                transactions = [serialize(row) for row in list_transactions(db)]
        except (PersistenceError, InvalidTransaction):
            logger.exception("Failed to load transactions")
            self._set(error=LOAD_FAILED)
            return False

        self._set_transactions(transactions)
        return True

    def submit(self, form: FormState) -> bool:
        """Validate and store a new transaction from the entry form."""
        self._set(error=None, form=form)

        try:
            fields = to_record(form.as_payload())
        except InvalidTransaction as exc:
            self._set(error=str(exc))
            return False

        self._set(is_submitting=True)
        try:
            with self._session_factory() as db:
                created = serialize(create_transaction(db, fields))
        except PersistenceError:
            logger.exception("Failed to save transaction")
            self._set(error=SAVE_FAILED, is_submitting=False)
            return False

        self._set_transactions([created] + self._state.transactions)
        self._set(is_submitting=False)
        self.reset_form()
        return True

    def delete(self, transaction_id: int) -> bool:
        self._set(error=None, is_submitting=True)
        try:
            with self._session_factory() as db:
                delete_transaction(db, transaction_id)
        except (NotFound, PersistenceError):
            logger.exception("Failed to delete transaction %s", transaction_id)
            self._set(error=DELETE_FAILED, is_submitting=False)
            return False

        remaining = [t for t in self._state.transactions if t.id != transaction_id]
        self._set_transactions(remaining)
        self._set(is_submitting=False)
        return True

    def reset_form(self) -> None:
        self._set(form=FormState(), form_version=self._state.form_version + 1)
