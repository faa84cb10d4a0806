"""Streamlit entry point for the Personal Finance Tracker."""

from __future__ import annotations

from datetime import date, datetime

import streamlit as st
from finance_tracker import config, identity, insights, periods, utils, viz
from finance_tracker.forms import TransactionForm, empty_form
from finance_tracker.logging_setup import configure_logging, get_logger
from finance_tracker.models import CATEGORIES
from finance_tracker.session import TrackerSession
from finance_tracker.store import SqlTransactionStore

logger = get_logger("finance_tracker.app")

FORM_KEYS = {
    "type": "form_type",
    "amount": "form_amount",
    "description": "form_description",
    "category": "form_category",
    "transaction_date": "form_date",
}


@st.cache_resource(show_spinner=False)
def _get_store(database_url: str) -> SqlTransactionStore:
    store = SqlTransactionStore(database_url)
    store.create_schema()
    return store


def _get_tracker(settings: config.Settings) -> TrackerSession:
    if "tracker" not in st.session_state:
        owner_id = identity.get_or_create_local_owner_id(settings.owner_id_path)
        tracker = TrackerSession(store=_get_store(settings.database_url), owner_id=owner_id)
        tracker.refresh()
        st.session_state["tracker"] = tracker
        _load_form_state(empty_form(date.today()))
        logger.info("Started tracker session for %s", owner_id)
    return st.session_state["tracker"]


def _load_form_state(form: TransactionForm) -> None:
    st.session_state[FORM_KEYS["type"]] = form.type
    st.session_state[FORM_KEYS["amount"]] = form.amount
    st.session_state[FORM_KEYS["description"]] = form.description
    st.session_state[FORM_KEYS["category"]] = form.category
    st.session_state[FORM_KEYS["transaction_date"]] = form.transaction_date


def _read_form_state() -> TransactionForm:
    return TransactionForm(
        type=st.session_state.get(FORM_KEYS["type"], "expense"),
        amount=st.session_state.get(FORM_KEYS["amount"], ""),
        description=st.session_state.get(FORM_KEYS["description"], ""),
        category=st.session_state.get(FORM_KEYS["category"], ""),
        transaction_date=st.session_state.get(FORM_KEYS["transaction_date"], date.today()),
    )


# Widget callbacks run before the next render, so they may rewrite widget state.


def _on_submit(tracker: TrackerSession) -> None:
    if tracker.submit(_read_form_state(), date.today()):
        _load_form_state(empty_form(date.today()))


def _on_edit(tracker: TrackerSession, transaction_id: str) -> None:
    form = tracker.start_edit(transaction_id)
    if form is not None:
        _load_form_state(form)
        st.session_state["active_view"] = "transactions"


def _on_cancel_edit(tracker: TrackerSession) -> None:
    tracker.cancel_edit()
    _load_form_state(empty_form(date.today()))


def _on_request_delete(transaction_id: str) -> None:
    st.session_state["pending_delete"] = transaction_id


def _on_confirm_delete(tracker: TrackerSession, transaction_id: str) -> None:
    st.session_state.pop("pending_delete", None)
    if tracker.delete(transaction_id):
        if tracker.editing_id is None:
            _load_form_state(empty_form(date.today()))


def _on_keep() -> None:
    st.session_state.pop("pending_delete", None)


def _render_balance_cards(visible, currency_symbol: str) -> None:
    totals = insights.calculate_totals(visible)
    cards = [
        ("Current Balance", totals["balance"], "balance"),
        ("Total Income", totals["income"], "income"),
        ("Total Expenses", totals["expense"], "expense"),
    ]
    columns = st.columns(3, gap="medium")
    for column, (label, value, variant) in zip(columns, cards, strict=True):
        column.markdown(
            f"""
            <div class="balance-card balance-card--{variant}">
                <div class="balance-card__label">{label}</div>
                <div class="balance-card__value">{utils.format_currency(value, currency_symbol)}</div>
            </div>
            """,
            unsafe_allow_html=True,
        )


def _render_filter_bar(tracker: TrackerSession) -> None:
    if "filter_period" not in st.session_state:
        st.session_state["filter_period"] = tracker.filter_period
    choice = st.radio(
        "Filter by:",
        list(periods.PERIOD_OPTIONS),
        format_func=lambda value: periods.PERIOD_OPTIONS[value],
        horizontal=True,
        key="filter_period",
    )
    tracker.filter_period = choice


def _render_form(tracker: TrackerSession, currency_symbol: str) -> None:
    editing = tracker.editing
    st.subheader("Edit Transaction" if editing else "Add Transaction")

    current_category = st.session_state.get(FORM_KEYS["category"], "")
    category_options = ["", *CATEGORIES]
    if current_category and current_category not in category_options:
        category_options.append(current_category)

    with st.form("transaction_form", border=True):
        left, right = st.columns(2)
        with left:
            st.radio(
                "Type",
                ["income", "expense"],
                format_func=str.title,
                horizontal=True,
                key=FORM_KEYS["type"],
            )
            st.text_input(
                "Description",
                placeholder="e.g., Groceries, Salary",
                key=FORM_KEYS["description"],
            )
        with right:
            st.text_input(f"Amount ({currency_symbol})", placeholder="0.00", key=FORM_KEYS["amount"])
            st.selectbox(
                "Category",
                category_options,
                format_func=lambda value: value or "Select category",
                key=FORM_KEYS["category"],
            )
        st.date_input("Date", max_value=date.today(), key=FORM_KEYS["transaction_date"])

        if tracker.error:
            st.error(tracker.error)

        st.form_submit_button(
            "Update" if editing else "Add Transaction",
            type="primary",
            use_container_width=True,
            on_click=_on_submit,
            args=(tracker,),
        )

    if editing:
        st.button("Cancel", on_click=_on_cancel_edit, args=(tracker,))


def _render_transaction_list(tracker: TrackerSession, visible, currency_symbol: str) -> None:
    if visible.empty:
        st.info("No transactions yet. Add your first transaction above!")
        return

    widths = [1.1, 2.2, 1.2, 1, 1.3, 0.6, 0.6]
    header = st.columns(widths)
    for column, title in zip(header, ["Date", "Description", "Category", "Type", "Amount", "", ""], strict=True):
        column.markdown(f"**{title}**")

    pending_delete = st.session_state.get("pending_delete")
    for row in visible.to_dict("records"):
        transaction_id = str(row["id"])
        is_income = row["type"] == "income"
        cols = st.columns(widths)
        cols[0].write(row["transaction_date"].strftime("%d %b %Y"))
        cols[1].write(row["description"])
        cols[2].caption(row["category"])
        cols[3].markdown(":green[▲ Income]" if is_income else ":red[▼ Expense]")
        sign = "+" if is_income else "-"
        amount_text = f"{sign}{utils.format_currency(float(row['amount']), currency_symbol)}"
        cols[4].markdown(f":green[{amount_text}]" if is_income else f":red[{amount_text}]")
        cols[5].button("✏️", key=f"edit_{transaction_id}", help="Edit", on_click=_on_edit, args=(tracker, transaction_id))
        cols[6].button("🗑️", key=f"delete_{transaction_id}", help="Delete", on_click=_on_request_delete, args=(transaction_id,))

        if pending_delete == transaction_id:
            confirm_cols = st.columns([3, 1, 1])
            confirm_cols[0].warning("Are you sure you want to delete this transaction?")
            confirm_cols[1].button(
                "Delete",
                key=f"confirm_{transaction_id}",
                type="primary",
                on_click=_on_confirm_delete,
                args=(tracker, transaction_id),
            )
            confirm_cols[2].button("Keep", key=f"keep_{transaction_id}", on_click=_on_keep)


def _render_statistics(tracker: TrackerSession, settings: config.Settings, now: datetime) -> None:
    st.subheader("Statistics")

    tab = st.radio(
        "Statistics type",
        ["expenses", "income"],
        format_func=str.title,
        horizontal=True,
        key="statistics_tab",
        label_visibility="collapsed",
    )
    tracker.statistics_tab = tab
    txn_type = "expense" if tab == "expenses" else "income"

    stats = insights.calculate_statistics(
        tracker.transactions,
        txn_type,
        tracker.filter_period,
        now,
        bucket_count=settings.trend_buckets,
    )

    st.markdown(f"### {'Spending' if txn_type == 'expense' else 'Earnings'}")
    st.caption("Where does my money go?" if txn_type == "expense" else "Where does my money come from?")

    change = stats["change_pct"]
    change_html = ""
    if change is not None:
        rising_is_good = txn_type == "income"
        good = (change >= 0) == rising_is_good
        change_html = (
            f'<span class="stat-change stat-change--{"good" if good else "bad"}">'
            f"{'+' if change >= 0 else ''}{change:.0f}%</span>"
        )
    st.markdown(
        f"""
        <div class="stat-headline">
            <span class="stat-period">{stats['period_label']}</span>
            <span class="stat-total">{utils.format_currency(stats['total'], settings.currency_symbol, decimals=0)}</span>
            {change_html}
        </div>
        """,
        unsafe_allow_html=True,
    )
    if change is not None:
        st.caption("vs past period")

    donut = viz.plot_category_donut(
        stats["categories"],
        txn_type,
        total=stats["total"],
        currency_symbol=settings.currency_symbol,
    )
    st.plotly_chart(donut, use_container_width=True, config={"displayModeBar": False})

    legend = viz.legend_entries(stats["categories"], txn_type)
    if legend:
        legend_html = "".join(
            f'<span class="legend-item"><span class="legend-dot" style="background:{color}"></span>{name}</span>'
            for name, color in legend
        )
        st.markdown(f'<div class="legend-row">{legend_html}</div>', unsafe_allow_html=True)

    st.markdown("#### TREND")
    trend = viz.plot_trend_bar(stats["trend"], txn_type, currency_symbol=settings.currency_symbol)
    st.plotly_chart(trend, use_container_width=True, config={"displayModeBar": False})


def main() -> None:
    """Render the Personal Finance Tracker Streamlit application."""

    st.set_page_config(
        page_title="Personal Finance Tracker",
        page_icon="💰",
        layout="wide",
    )

    settings = config.load_settings()
    configure_logging(settings.log_level)

    st.markdown(
        """
        <style>
        [data-testid="stAppViewContainer"] {
            background: linear-gradient(135deg, #eff6ff, #dbeafe);
        }
        .balance-card {
            border-radius: 16px;
            padding: 1.4rem 1.5rem;
            color: #ffffff;
            box-shadow: 0 12px 32px -20px rgba(15, 23, 42, 0.6);
            margin-bottom: 1rem;
        }
        .balance-card--balance { background: linear-gradient(135deg, #3b82f6, #2563eb); }
        .balance-card--income { background: linear-gradient(135deg, #22c55e, #16a34a); }
        .balance-card--expense { background: linear-gradient(135deg, #ef4444, #dc2626); }
        .balance-card__label {
            font-size: 0.85rem;
            font-weight: 600;
            opacity: 0.85;
        }
        .balance-card__value {
            font-size: 1.9rem;
            font-weight: 700;
        }
        .stat-headline { display: flex; align-items: baseline; gap: 0.75rem; }
        .stat-period { font-size: 0.85rem; color: #6b7280; }
        .stat-total { font-size: 1.6rem; font-weight: 700; }
        .stat-change { font-size: 0.9rem; font-weight: 600; }
        .stat-change--good { color: #16a34a; }
        .stat-change--bad { color: #dc2626; }
        .legend-row { display: flex; flex-wrap: wrap; gap: 1rem; justify-content: center; }
        .legend-item { display: flex; align-items: center; gap: 0.4rem; font-size: 0.85rem; }
        .legend-dot { width: 0.75rem; height: 0.75rem; border-radius: 999px; display: inline-block; }
        </style>
        """,
        unsafe_allow_html=True,
    )

    tracker = _get_tracker(settings)
    now = datetime.now()

    st.title("Personal Finance Tracker")
    st.caption("Manage your income and expenses")

    if "filter_period" in st.session_state:
        tracker.filter_period = st.session_state["filter_period"]
    visible = tracker.visible_transactions(now)
    _render_balance_cards(visible, settings.currency_symbol)

    if "active_view" not in st.session_state:
        st.session_state["active_view"] = tracker.active_view
    view = st.radio(
        "View",
        ["transactions", "statistics"],
        format_func=lambda value: "📋 Transactions" if value == "transactions" else "📊 Statistics",
        horizontal=True,
        key="active_view",
        label_visibility="collapsed",
    )
    tracker.active_view = view

    if view == "transactions":
        _render_form(tracker, settings.currency_symbol)
        _render_filter_bar(tracker)
        _render_transaction_list(tracker, visible, settings.currency_symbol)
    else:
        _render_filter_bar(tracker)
        _render_statistics(tracker, settings, now)

    st.sidebar.caption(f"Local identity: `{tracker.owner_id}`")
    st.sidebar.caption("Stored on this device only; not a login.")


if __name__ == "__main__":
    main()
