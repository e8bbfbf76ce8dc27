"""Totals and the expense breakdown, derived from a list of transactions."""

from typing import Any, Dict, Iterable

from pydantic import BaseModel

from database import TransactionType


class Totals(BaseModel):
    income: float = 0.0
    expense: float = 0.0
    balance: float = 0.0


def _field(transaction: Any, name: str):
    # Works for ORM rows, pydantic models and plain dicts alike
    if isinstance(transaction, dict):
        return transaction.get(name)
    return getattr(transaction, name, None)


def _is_income(transaction: Any) -> bool:
    return _field(transaction, "type") == TransactionType.INCOME.value


def compute_totals(transactions: Iterable[Any]) -> Totals:
    """Fold transactions into income, expense and balance.

    Anything not marked INCOME counts as an expense. An empty input gives
    all zeros.
    """
    income = 0.0
    expense = 0.0
    balance = 0.0
    for transaction in transactions:
        amount = float(_field(transaction, "amount") or 0)
        if _is_income(transaction):
            income += amount
        else:
            expense += amount
        balance = income - expense
    return Totals(income=income, expense=expense, balance=balance)


def category_breakdown(transactions: Iterable[Any]) -> Dict[str, float]:
    """Sum expense amounts per category, keeping first-seen order."""
    by_cat: Dict[str, float] = {}
    for transaction in transactions:
        if _is_income(transaction):
            continue
        category = _field(transaction, "category")
        by_cat[category] = by_cat.get(category, 0.0) + float(_field(transaction, "amount") or 0)
    return by_cat
