import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from datetime import date

import streamlit as st
import pandas as pd
import plotly.graph_objects as go

from tracker.config import get_settings
from tracker.domain import INCOME, EXPENSE, TRANSACTION_TYPES
from tracker.defaults import COLOR_OPTIONS
from tracker.filters import ALL_CATEGORIES
from tracker.formatting import format_currency, format_compact, format_date, month_label
from tracker.services import FinanceTracker
from tracker.storage import JsonStore

settings = get_settings()
logging.basicConfig(level=settings.log_level)

st.set_page_config(page_title="Finance Tracker", layout="wide")

if "tracker" not in st.session_state:
    st.session_state.tracker = FinanceTracker.with_default_handlers(
        JsonStore(settings.data_dir),
        warning_threshold=settings.warning_threshold,
    )
tracker: FinanceTracker = st.session_state.tracker


def money(amount):
    return format_currency(amount, settings.currency_symbol)


def category_names(type_=None):
    return [c.name for c in tracker.categories_of(type_)]


def transaction_rows(items, key_prefix):
    for t in items:
        cat = tracker.category_for(t.category)
        sign = "+" if t.type == INCOME else "-"
        row = st.columns([4, 2, 2, 1])
        row[0].markdown(
            f"<span style='color:{cat.color}'>●</span> **{t.description}**  \n{t.category}",
            unsafe_allow_html=True,
        )
        row[1].write(format_date(t.date))
        row[2].write(f"{sign}{money(t.amount)}")
        if row[3].button("🗑", key=f"{key_prefix}_{t.id}"):
            tracker.delete_transaction(t.id)
            st.rerun()


stats = tracker.monthly_stats()
k1, k2, k3, k4 = st.columns(4)
with k1:
    st.metric("Income this month", money(stats.income))
with k2:
    st.metric("Expenses this month", money(stats.expenses))
with k3:
    st.metric("Balance", money(stats.balance))
with k4:
    st.metric("Transactions", stats.transaction_count)

with st.sidebar.expander("➕ Add transaction", expanded=False):
    # outside the form so switching type reruns and refreshes the category list
    tx_type = st.radio(
        "Type", TRANSACTION_TYPES, index=TRANSACTION_TYPES.index(EXPENSE),
        horizontal=True, key="tx_type",
    )
    with st.form("add_transaction", clear_on_submit=True):
        amount = st.number_input("Amount", min_value=0.0, step=1000.0)
        description = st.text_input("Description")
        category = st.selectbox("Category", [""] + category_names(tx_type), key="tx_category")
        tx_date = st.date_input("Date", value=date.today())
        if st.form_submit_button("Save"):
            added = tracker.add_transaction({
                "amount": amount,
                "description": description,
                "category": category,
                "type": tx_type,
                "date": tx_date.isoformat(),
            })
            if added is None:
                st.warning("Amount, description and category are required.")
            for alert in tracker.last_alerts:
                st.warning(alert["alert"])

overview, transactions_tab, budget_tab, categories_tab = st.tabs(
    ["🏠 Overview", "🧾 Transactions", "💰 Budget", "🗂 Categories"]
)

with overview:
    trend = tracker.trend()
    months = [b.month for b in trend.buckets]
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=months, y=[b.income for b in trend.buckets], name="Income",
        text=[format_compact(b.income) for b in trend.buckets],
    ))
    fig.add_trace(go.Bar(
        x=months, y=[b.expenses for b in trend.buckets], name="Expenses",
        text=[format_compact(b.expenses) for b in trend.buckets],
    ))
    fig.update_layout(
        title="Last 6 months",
        barmode="group",
        yaxis=dict(range=[0, trend.max_value]),
        margin=dict(t=40, b=10, l=10, r=10),
    )
    st.plotly_chart(fig, use_container_width=True)

    c1, c2, c3 = st.columns(3)
    c1.metric("Total income", money(trend.total_income))
    c2.metric("Total expenses", money(trend.total_expenses))
    c3.metric("Average balance", money(trend.average_balance))

    st.subheader("Recent transactions")
    recent = tracker.transactions[:5]
    if not recent:
        st.info("No transactions yet.")
    transaction_rows(recent, "recent_tx")

with transactions_tab:
    col1, col2 = st.columns([3, 1])
    with col1:
        search_term = st.text_input("Search", key="search_term")
    with col2:
        category_filter = st.selectbox("Category", [ALL_CATEGORIES] + category_names())

    found = tracker.search(search_term, category_filter)
    if not found:
        st.info("No transactions yet.")
    transaction_rows(found, "del_tx")

    if found:
        df = pd.DataFrame([t.to_dict() for t in found])
        st.download_button(
            "⬇️ Download CSV",
            df.to_csv(index=False),
            file_name="transactions.csv",
            mime="text/csv",
        )

with budget_tab:
    with st.form("add_budget", clear_on_submit=True):
        b1, b2, b3 = st.columns(3)
        budget_category = b1.selectbox("Category", [""] + category_names(EXPENSE))
        limit = b2.number_input("Limit", min_value=0.0, step=100000.0)
        month = b3.text_input("Month", value=tracker.current_month())
        if st.form_submit_button("Add budget"):
            if not tracker.add_budget({"category": budget_category, "limit": limit, "month": month}):
                st.warning("Category and limit are required.")

    statuses = tracker.budget_status()
    if not statuses:
        st.info("No budgets defined")
    for s in statuses:
        st.metric(
            f"{s.budget.category} · {month_label(s.budget.month)}",
            f"{money(s.spent)} / {money(s.budget.limit)}",
            f"{s.percentage:.1f}% used",
            delta_color="inverse",
        )
        st.progress(s.progress / 100)
        if s.status == "exceeded":
            st.error(f"Over budget by {money(s.over_by)}")
        elif s.status == "warning":
            st.warning(f"{money(s.remaining)} left")
        if st.button("Delete", key=f"del_budget_{s.budget.id}"):
            tracker.delete_budget(s.budget.id)
            st.rerun()

with categories_tab:
    with st.form("add_category", clear_on_submit=True):
        name = st.text_input("Name")
        color = st.selectbox("Color", COLOR_OPTIONS)
        cat_type = st.radio("Type", TRANSACTION_TYPES, horizontal=True, key="cat_type")
        if st.form_submit_button("Add category"):
            tracker.add_category({"name": name, "color": color, "type": cat_type})

    for type_, title in ((INCOME, "Income categories"), (EXPENSE, "Expense categories")):
        st.subheader(title)
        for cat in tracker.categories_of(type_):
            with st.expander(cat.name):
                new_name = st.text_input("Name", value=cat.name, key=f"name_{cat.id}")
                new_color = st.color_picker("Color", value=cat.color, key=f"color_{cat.id}")
                e1, e2 = st.columns(2)
                if e1.button("Save", key=f"save_{cat.id}"):
                    tracker.update_category(cat.id, {"name": new_name, "color": new_color, "type": cat.type})
                    st.rerun()
                if e2.button("Delete", key=f"del_cat_{cat.id}"):
                    tracker.delete_category(cat.id)
                    st.rerun()
