"""Database access for transactions.

Every function takes an open SQLAlchemy session. Driver errors come back as
``PersistenceError`` so callers never have to know about SQLAlchemy.
"""

from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import Transaction
from errors import NotFound, PersistenceError
from logger import get_logger

logger = get_logger()


def list_transactions(db: Session) -> List[Transaction]:
    """All transactions, newest first."""
    try:
        return db.query(Transaction).order_by(Transaction.date.desc(), Transaction.id.desc()).all()
    except SQLAlchemyError as exc:
        raise PersistenceError("Failed to load transactions") from exc


def create_transaction(db: Session, fields: Dict[str, Any]) -> Transaction:
    """Insert a validated transaction and return it with its new id."""
    txn = Transaction(**fields)
    try:
        db.add(txn)
        db.commit()
        db.refresh(txn)
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError("Failed to create transaction") from exc

    logger.info("Created transaction %s (%s %.2f %s)", txn.id, txn.type, txn.amount, txn.category)
    return txn


def delete_transaction(db: Session, transaction_id: int) -> None:
    """Delete a transaction by id.

    Raises:
        NotFound: if no transaction has that id.
        PersistenceError: if the database fails.
    """
    try:
        deleted = db.query(Transaction).filter(Transaction.id == transaction_id).delete()
        if not deleted:
            db.rollback()
            raise NotFound(f"Transaction {transaction_id} not found")
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError("Failed to delete transaction") from exc

    logger.info("Deleted transaction %s", transaction_id)
