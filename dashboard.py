# dashboard.py: summary cards, expense donut and transaction table

from typing import Iterable

import pandas as pd
import plotly.express as px
import streamlit as st

from aggregation import Totals, category_breakdown
from database import TransactionType

PALETTE = [
    "#ef4444",
    "#f97316",
    "#f59e0b",
    "#84cc16",
    "#22c55e",
    "#14b8a6",
    "#3b82f6",
    "#6366f1",
    "#a855f7",
    "#d946ef",
]

INCOME_COLOR = "#16a34a"
EXPENSE_COLOR = "#dc2626"

TABLE_COLUMNS = ["Date", "Category", "Note", "Amount", "Type", "ID"]


def format_money(value: float, symbol: str = "¥") -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def _kpis(totals: Totals, symbol: str = "¥"):
    """
    Displays the income / expense / balance cards.
    """
    col1, col2, col3 = st.columns(3)
    col1.metric("💰 Total Income", format_money(totals.income, symbol))
    col2.metric("💸 Total Expense", format_money(totals.expense, symbol))
    col3.metric(
        "📊 Balance",
        format_money(totals.balance, symbol),
        delta="In the black" if totals.balance >= 0 else "In the red",
        delta_color="normal" if totals.balance >= 0 else "inverse",
    )


def cat_spend(transactions: Iterable, dark: bool = False):
    """
    Donut chart of spending by category. Returns None when there are no
    expenses to plot.
    """
    by_cat = category_breakdown(transactions)
    if not by_cat:
        return None

    df = pd.DataFrame({"Category": list(by_cat.keys()), "Amount": list(by_cat.values())})
    fig = px.pie(
        df,
        values="Amount",
        names="Category",
        hole=0.4,
        title="Expense by Category",
        color_discrete_sequence=PALETTE,
        template="plotly_dark" if dark else "plotly_white",
    )
    fig.update_traces(textposition="inside", textinfo="percent+label", sort=False)
    fig.update_layout(legend=dict(orientation="h", yanchor="top", y=-0.05))
    return fig


def transactions_frame(transactions: Iterable, symbol: str = "¥") -> pd.DataFrame:
    """
    Table rows for the transaction log, newest first as given.
    """
    rows = []
    for t in transactions:
        is_income = t.type == TransactionType.INCOME
        rows.append({
            "Date": pd.to_datetime(t.date).strftime("%Y-%m-%d"),
            "Category": t.category,
            "Note": t.note or "-",
            "Amount": ("+" if is_income else "-") + format_money(t.amount, symbol),
            "Type": "Income" if is_income else "Expense",
            "ID": t.id,
        })
    if not rows:
        return pd.DataFrame(columns=TABLE_COLUMNS)
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def theme_css(dark: bool) -> str:
    """Style block injected into the page for the chosen color mode."""
    if dark:
        background, card, text, muted = "#020617", "#0f172a", "#e2e8f0", "#94a3b8"
    else:
        background, card, text, muted = "#f9fafb", "#ffffff", "#0f172a", "#64748b"
    return f"""
<style>
    .stApp {{
        background: {background};
        color: {text};
    }}
    div[data-testid="stMetric"] {{
        background: {card};
        border-radius: 16px;
        padding: 16px 20px;
        box-shadow: 0 10px 30px rgba(15, 23, 42, 0.08);
    }}
    div[data-testid="stMetricLabel"] p {{
        color: {muted};
    }}
    .income {{ color: {INCOME_COLOR}; }}
    .expense {{ color: {EXPENSE_COLOR}; }}
</style>
"""
