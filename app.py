import streamlit as st
from pathlib import Path
import sys
from datetime import date

# Add current directory to path
sys.path.append(str(Path(__file__).parent))

from config import get_settings
from database import SessionLocal, TransactionType, init_db
from dashboard import _kpis, cat_spend, theme_css, transactions_frame
from logger import setup_logging
from store import FormState, TransactionStore

# --- Configuration ---
st.set_page_config(page_title="Money Tracker", layout="wide", page_icon="💰")
settings = get_settings()
setup_logging(settings)
SYMBOL = settings.currency_symbol

# --- Database & State ---
init_db()

if "store" not in st.session_state:
    st.session_state.store = TransactionStore(SessionLocal)
    st.session_state.store.load()

store: TransactionStore = st.session_state.store

TYPE_LABELS = {TransactionType.EXPENSE: "Expense", TransactionType.INCOME: "Income"}

# Sidebar
with st.sidebar:
    st.header("Appearance")
    dark_mode = st.toggle("🌙 Dark mode", key="dark_mode")
    st.divider()
    if st.button("🔄 Reload from database"):
        store.load()

st.markdown(theme_css(dark_mode), unsafe_allow_html=True)

st.title("💰 Money Tracker")
st.caption("Add, review and manage your income and expenses.")

state = store.state

# --- Summary ---
_kpis(state.totals, SYMBOL)

# --- Entry Form ---
st.subheader("➕ Add a Transaction")
st.caption("Income and expenses are totalled automatically.")

version = state.form_version
with st.form(f"add_transaction_{version}"):
    col1, col2 = st.columns(2)
    amount = col1.text_input("Amount", value=state.form.amount, key=f"amount_{version}")
    category = col2.text_input("Category", value=state.form.category, key=f"category_{version}")

    col3, col4 = st.columns(2)
    txn_type = col3.radio(
        "Type",
        list(TYPE_LABELS),
        index=list(TYPE_LABELS).index(state.form.type),
        format_func=TYPE_LABELS.get,
        horizontal=True,
        key=f"type_{version}",
    )
    when = col4.date_input(
        "Date",
        value=date.fromisoformat(state.form.date) if state.form.date else date.today(),
        key=f"date_{version}",
    )
    note = st.text_area("Note", value=state.form.note, placeholder="Optional", height=68, key=f"note_{version}")

    submitted = st.form_submit_button("Add Transaction", disabled=state.is_submitting)

if submitted:
    form = FormState(
        amount=amount,
        category=category,
        note=note,
        date=when.isoformat() if when else "",
        type=txn_type,
    )
    if store.submit(form):
        st.rerun()

if store.state.error:
    st.error(store.state.error)

# --- Transaction Log ---
st.subheader("💳 Transactions")
transactions = store.state.transactions
if not transactions:
    st.info("No transactions yet. Add your first one above!")
else:
    df = transactions_frame(transactions, SYMBOL)

    def color_amount(val):
        color = "green" if str(val).startswith("+") else "red"
        return f"color: {color}"

    st.dataframe(df.style.map(color_amount, subset=["Amount"]), use_container_width=True, hide_index=True)

    labels = {row["ID"]: f"#{row['ID']} · {row['Date']} · {row['Category']} · {row['Amount']}" for _, row in df.iterrows()}
    to_delete = st.selectbox("Select to Delete", list(labels), format_func=labels.get)
    if st.button("Delete Selected", disabled=store.state.is_submitting):
        if store.delete(int(to_delete)):
            st.rerun()
        else:
            st.error(store.state.error)

# --- Category Breakdown ---
st.subheader("🍩 Expense by Category")
st.caption("See where your money goes.")
fig = cat_spend(store.state.transactions, dark=dark_mode)
if fig is None:
    st.info("Add some expenses to see the category breakdown.")
else:
    st.plotly_chart(fig, use_container_width=True)
