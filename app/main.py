import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st
import pandas as pd
import plotly.graph_objects as go
import plotly.express as px

from tracker import config
from tracker.domain import BUDGET_PERIODS, CATEGORIES
from tracker.events import BUDGET_ALERT, GOAL_REACHED, Event
from tracker.insights import (
    AVERAGE_DAILY,
    NET,
    TOP_CATEGORY,
    TOTAL_EXPENSE,
    TOTAL_INCOME,
    TRANSACTION_COUNT,
)
from tracker.services import FinanceTracker
from tracker.storage import JsonStore

config.configure_logging()
config.ensure_data_directories()

st.set_page_config(page_title="Finance Tracker", layout="wide")

fmt = config.format_currency


def icon(category: str) -> str:
    return config.CATEGORY_ICONS.get(category, "📌")


def get_tracker() -> FinanceTracker:
    if "tracker" not in st.session_state:
        instance = FinanceTracker(JsonStore())

        def queue_notice(event: Event, payload: dict) -> dict:
            st.session_state.notices.append((event.name, payload))
            return {}

        instance.bus.subscribe(BUDGET_ALERT, queue_notice)
        instance.bus.subscribe(GOAL_REACHED, queue_notice)
        st.session_state.tracker = instance
    return st.session_state.tracker


if "notices" not in st.session_state:
    st.session_state.notices = []

finance = get_tracker()


def show_notices():
    for name, payload in st.session_state.notices:
        if name == BUDGET_ALERT and payload["tier"] == "exceeded":
            st.error(f"⚠️ Budget Alert: You've exceeded your {payload['category']} budget!")
        elif name == BUDGET_ALERT:
            st.warning(
                f"⚠️ Budget Warning: You've used {payload['ratio'] * 100:.0f}% "
                f"of your {payload['category']} budget."
            )
        elif name == GOAL_REACHED:
            st.balloons()
            st.success(f"🎉 Congratulations! You've reached your goal: {payload['name']}!")
    st.session_state.notices = []


def budget_rows(statuses):
    for s in statuses:
        st.write(f"{icon(s.budget.category)} **{s.budget.category.capitalize()}** "
                 f"{fmt(s.spent)} / {fmt(s.limit)}")
        st.progress(s.percent_shown / 100)
        st.caption(f"{s.ratio * 100:.1f}% used · {s.budget.period} · {s.tier}")


def goal_rows(progress):
    for p in progress:
        st.write(f"🎯 **{p.goal.name}** {fmt(p.goal.current)} / {fmt(p.goal.target)}")
        st.progress(p.percent_shown / 100)
        st.caption(f"{p.ratio * 100:.1f}% complete")


def tx_to_df(tx_list):
    rows = [
        {
            "date": t.date,
            "description": t.description,
            "category": t.category,
            "amount": t.amount,
            "tags": ", ".join(t.tags),
            "notes": t.notes,
        }
        for t in tx_list
    ]
    return pd.DataFrame(rows, columns=["date", "description", "category", "amount", "tags", "notes"])


st.sidebar.caption(pd.Timestamp.now().strftime("%A, %d %B %Y"))
menu = st.sidebar.radio(
    "Menu",
    ["🏠 Dashboard", "🧾 Transactions", "💰 Budgets", "🎯 Goals", "📊 Analytics"]
)

show_notices()

if finance.unsaved:
    st.warning(f"💾 Could not save {', '.join(sorted(finance.unsaved))}. Changes are kept until the app restarts.")

if menu == "🏠 Dashboard":
    summary = finance.summary()
    k1, k2, k3, k4 = st.columns(4)
    with k1:
        st.metric("Balance", fmt(summary.balance))
    with k2:
        st.metric("Income", fmt(summary.income))
    with k3:
        st.metric("Expenses", fmt(summary.expense))
    with k4:
        st.metric("Transactions", summary.count)

    chart_left, chart_right = st.columns(2)
    with chart_left:
        totals = finance.spending_by_category()
        if totals:
            fig_cat = px.pie(
                names=[c.capitalize() for c in totals],
                values=list(totals.values()),
                hole=0.5,
                title="Expenses by Category",
            )
            st.plotly_chart(fig_cat, use_container_width=True)
        else:
            st.info("No expenses yet")
    with chart_right:
        fig_cmp = px.bar(
            x=["Income", "Expenses"],
            y=[summary.income, summary.expense],
            color=["Income", "Expenses"],
            color_discrete_map={"Income": "#56ab2f", "Expenses": "#eb3349"},
            labels={"x": "", "y": f"Amount ({config.CURRENCY_SYMBOL})"},
            title="Income vs Expenses",
        )
        fig_cmp.update_layout(showlegend=False)
        st.plotly_chart(fig_cmp, use_container_width=True)

    col_b, col_g = st.columns(2)
    with col_b:
        st.subheader("💰 Budgets")
        statuses = finance.budget_statuses()
        if statuses:
            budget_rows(statuses[:3])
        else:
            st.info("Set budgets to track your spending")
    with col_g:
        st.subheader("🎯 Goals")
        progress = finance.goal_progress()
        if progress:
            goal_rows(progress[:3])
        else:
            st.info("Create savings goals to track your progress")

elif menu == "🧾 Transactions":
    st.title("🧾 Transactions")

    st.subheader("➕ Add New Transaction")
    with st.form("transaction_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            description = st.text_input("Description")
            amount = st.number_input("Amount (− expense, + income)", step=100.0, format="%.2f")
        with col2:
            category = st.selectbox("Category", CATEGORIES, format_func=lambda c: f"{icon(c)} {c.capitalize()}")
            tags = st.text_input("Tags (comma separated)")
        notes = st.text_input("Notes")
        submitted = st.form_submit_button("Add Transaction")

    if submitted:
        result = finance.add_transaction(description, amount, category, tags, notes)
        if result.is_left():
            st.error(f"❌ {result.get_error()['message']}")
        else:
            st.rerun()

    st.divider()

    kind = st.radio("Show", ["all", "income", "expense"], horizontal=True, format_func=str.capitalize)
    shown = finance.transactions_for(kind)
    st.caption(f"{len(shown)} total")

    if not shown:
        st.info("No transactions yet")
    for t in shown:
        c_info, c_amount, c_delete = st.columns([6, 2, 1])
        with c_info:
            st.write(f"**{t.description}** {icon(t.category)}  \n{t.date:%d %b}")
            if t.tags:
                st.caption(" ".join(f"`{tag}`" for tag in t.tags))
            if t.notes:
                st.caption(f"📝 {t.notes}")
        with c_amount:
            color = "green" if t.is_income else "red"
            st.markdown(f":{color}[{fmt(t.amount)}]")
        with c_delete:
            if st.button("×", key=f"del_tx_{t.id}"):
                finance.remove_transaction(t.id)
                st.rerun()

    if shown:
        csv = tx_to_df(shown).to_csv(index=False)
        st.download_button("⬇ Download CSV", csv, file_name="transactions.csv", mime="text/csv")

elif menu == "💰 Budgets":
    st.title("💰 Budgets")

    with st.form("budget_form", clear_on_submit=True):
        col1, col2, col3 = st.columns(3)
        with col1:
            b_category = st.selectbox("Category", CATEGORIES, format_func=lambda c: f"{icon(c)} {c.capitalize()}")
        with col2:
            b_amount = st.number_input("Limit", min_value=0.0, step=500.0, format="%.2f")
        with col3:
            b_period = st.selectbox("Period", BUDGET_PERIODS, index=1, format_func=str.capitalize)
        budget_submitted = st.form_submit_button("Set Budget")

    if budget_submitted:
        result = finance.set_budget(b_category, b_amount, b_period)
        if result.is_left():
            st.error(f"❌ {result.get_error()['message']}")
        else:
            st.rerun()

    statuses = finance.budget_statuses()
    if not statuses:
        st.info("No budgets set yet")
    for s in statuses:
        c_bar, c_delete = st.columns([8, 1])
        with c_bar:
            budget_rows([s])
        with c_delete:
            if st.button("Delete", key=f"del_budget_{s.budget.id}"):
                finance.remove_budget(s.budget.id)
                st.rerun()

elif menu == "🎯 Goals":
    st.title("🎯 Savings Goals")

    with st.form("goal_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            g_name = st.text_input("Goal name")
            g_target = st.number_input("Target", min_value=0.0, step=1000.0, format="%.2f")
        with col2:
            g_current = st.number_input("Already saved", min_value=0.0, step=1000.0, format="%.2f")
            g_deadline = st.date_input("Deadline", value=None)
        goal_submitted = st.form_submit_button("Add Goal")

    if goal_submitted:
        result = finance.add_goal(g_name, g_target, g_current, g_deadline)
        if result.is_left():
            st.error(f"❌ {result.get_error()['message']}")
        else:
            st.rerun()

    progress = finance.goal_progress()
    if not progress:
        st.info("No savings goals yet")
    for p in progress:
        with st.container(border=True):
            goal_rows([p])
            if p.days_left is not None:
                st.caption(f"{p.days_left} days left" if not p.deadline_passed else "Deadline passed")
            st.caption(f"{fmt(p.remaining_shown)} remaining")
            c_amount, c_add, c_delete = st.columns([3, 1, 1])
            with c_amount:
                contribution = st.text_input("Amount to add", key=f"contrib_{p.goal.id}", label_visibility="collapsed")
            with c_add:
                if st.button("Add Money", key=f"add_goal_{p.goal.id}"):
                    finance.contribute_to_goal(p.goal.id, contribution)
                    st.rerun()
            with c_delete:
                if st.button("Delete", key=f"del_goal_{p.goal.id}"):
                    finance.remove_goal(p.goal.id)
                    st.rerun()

elif menu == "📊 Analytics":
    st.title("📊 Analytics")

    period = st.selectbox("Period", ["week", "month", "quarter", "year"], index=1, format_func=str.capitalize)
    series = finance.trend(period)

    col_exp, col_inc = st.columns(2)
    with col_exp:
        fig_exp = go.Figure()
        fig_exp.add_trace(go.Scatter(
            x=list(series.labels), y=list(series.expense), mode="lines", name="Expenses",
            line=dict(color="#eb3349", shape="spline"), fill="tozeroy",
        ))
        fig_exp.update_layout(title="Spending Trend", margin=dict(t=40, b=10, l=10, r=10))
        st.plotly_chart(fig_exp, use_container_width=True)
    with col_inc:
        fig_inc = go.Figure()
        fig_inc.add_trace(go.Scatter(
            x=list(series.labels), y=list(series.income), mode="lines", name="Income",
            line=dict(color="#56ab2f", shape="spline"), fill="tozeroy",
        ))
        fig_inc.update_layout(title="Income Trend", margin=dict(t=40, b=10, l=10, r=10))
        st.plotly_chart(fig_inc, use_container_width=True)

    st.subheader("💡 Insights")
    for fact in finance.insights(period):
        if fact.kind == TOTAL_INCOME:
            st.write(f"💰 Total income: {fmt(fact.value)}")
        elif fact.kind == TOTAL_EXPENSE:
            st.write(f"💸 Total expenses: {fmt(fact.value)}")
        elif fact.kind == NET:
            st.write(f"{'✅' if fact.healthy else '⚠️'} Net: {fmt(fact.value)}")
        elif fact.kind == TOP_CATEGORY:
            st.write(f"📊 Highest spending: {fact.category.capitalize()} ({fmt(fact.value)})")
        elif fact.kind == AVERAGE_DAILY:
            st.write(f"📅 Average daily spending: {fmt(fact.value)}")
        elif fact.kind == TRANSACTION_COUNT:
            st.write(f"📝 Total transactions: {fact.value}")
