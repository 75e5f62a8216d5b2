"""Streamlit entry point for the Finance Tracker dashboard."""

from __future__ import annotations

from datetime import date

import pandas as pd
import streamlit as st
from finance_tracker import config, export, insights, periods, store, synth, utils, viz
from finance_tracker.models import TRANSACTION_TYPES, InvalidRecordError


@st.cache_data(show_spinner=False)
def _load_sample(seed: int, end: date) -> tuple[list, pd.DataFrame]:
    return synth.generate_sample_data(end=end, seed=seed)


@st.cache_resource(show_spinner=False)
def _open_store(path: str) -> store.LocalStore:
    return store.LocalStore(path)


def _resolve_custom_range(value: object) -> periods.DateRange:
    if isinstance(value, (tuple, list)):
        if len(value) >= 2:
            return periods.DateRange(start=value[0], end=value[1])
        if len(value) == 1:
            return periods.DateRange(start=value[0])
        return periods.DateRange()
    return periods.DateRange(start=value)


def _render_metric(label: str, metric: dict, currency: str, *, has_comparison: bool) -> None:
    delta = utils.format_percent(metric["change"]) if has_comparison and metric["change"] else None
    inverse = label == "Total Expenses"
    st.metric(
        label,
        utils.format_currency(metric["value"], currency),
        delta=f"{delta} from previous period" if delta else None,
        delta_color="inverse" if inverse else "normal",
    )


def _render_insights(items: list[insights.Insight], currency: str) -> None:
    st.markdown("### Insights")
    if not items:
        st.caption(
            "Not enough data to generate insights yet. "
            "Add more transactions to see recommendations."
        )
        return

    st.caption("Here are your top spending categories this period:")
    for position, item in enumerate(items, start=1):
        left, right = st.columns([2, 1])
        left.markdown(f"**{position}. {item['category']}**")
        right.markdown(f"**{utils.format_currency(item['amount'], currency)}**")
        caption = insights.describe_change(item["change"])
        if caption:
            st.caption(caption)
        st.info(item["suggestion"])


def _category_picker(label: str, categories: list, *, key: str, selected: str | None = None) -> str | None:
    options = {c.id: c.name for c in categories}
    if not options:
        st.warning("No categories of this type yet.")
        return None
    ids = list(options)
    index = ids.index(selected) if selected in options else 0
    return st.selectbox(label, ids, index=index, format_func=options.get, key=key)


def _render_add_transaction(local: store.LocalStore) -> None:
    with st.expander("Add transaction"):
        # Outside the form so the category list follows the chosen type.
        kind = st.selectbox("Type", TRANSACTION_TYPES, key="add_type")
        with st.form("add_transaction", clear_on_submit=True):
            category_id = _category_picker(
                "Category", local.categories_of_type(kind), key=f"add_category_{kind}"
            )
            amount = st.number_input("Amount", min_value=0.0, step=100.0)
            when = st.date_input("Date", value=date.today())
            description = st.text_input("Description")
            if st.form_submit_button("Save"):
                try:
                    local.add_transaction(
                        amount=amount,
                        date=when,
                        category_id=category_id or "",
                        type=kind,
                        description=description or None,
                    )
                except InvalidRecordError as exc:
                    st.error(str(exc))
                else:
                    st.rerun()


def _render_edit_transaction(local: store.LocalStore, categories: list) -> None:
    records = sorted(local.transactions(), key=lambda t: t.date, reverse=True)
    if not records:
        return
    names = {c.id: c.name for c in categories}
    with st.expander("Edit or delete transaction"):
        labels = {
            t.id: f"{t.date.isoformat()} · {names.get(t.category_id, 'Unknown')} · "
            f"{t.amount:,.2f} {t.description or ''}".rstrip()
            for t in records
        }
        chosen = st.selectbox("Transaction", list(labels), format_func=labels.get, key="edit_txn")
        txn = local.get_transaction(chosen)
        kind = st.selectbox(
            "Type", TRANSACTION_TYPES, index=TRANSACTION_TYPES.index(txn.type), key=f"edit_type_{chosen}"
        )
        with st.form(f"edit_transaction_{chosen}"):
            category_id = _category_picker(
                "Category",
                local.categories_of_type(kind),
                key=f"edit_category_{chosen}_{kind}",
                selected=txn.category_id,
            )
            amount = st.number_input("Amount", min_value=0.0, step=100.0, value=float(txn.amount))
            when = st.date_input("Date", value=txn.date)
            description = st.text_input("Description", value=txn.description or "")
            save = st.form_submit_button("Save changes")
            delete = st.form_submit_button("Delete transaction")

        try:
            if save:
                local.update_transaction(
                    chosen,
                    amount=amount,
                    date=when,
                    category_id=category_id or "",
                    type=kind,
                    description=description or None,
                )
                st.rerun()
            elif delete:
                local.delete_transaction(chosen)
                st.rerun()
        except (InvalidRecordError, store.RecordNotFoundError) as exc:
            st.error(str(exc))


def _render_add_category(local: store.LocalStore) -> None:
    with st.expander("New category"):
        with st.form("add_category", clear_on_submit=True):
            name = st.text_input("Name")
            kind = st.selectbox("Type", TRANSACTION_TYPES, key="category_type")
            color = st.color_picker("Colour", value="#71717a")
            if st.form_submit_button("Create"):
                try:
                    local.add_category(name=name, type=kind, color=color)
                except InvalidRecordError as exc:
                    st.error(str(exc))
                else:
                    st.rerun()


def _render_manage_categories(local: store.LocalStore, categories: list) -> None:
    if not categories:
        return
    with st.expander("Manage categories"):
        notice = st.session_state.pop("category_notice", None)
        if notice:
            st.success(notice)
        chosen = _category_picker("Category", categories, key="manage_category")
        category = local.get_category(chosen)
        with st.form(f"edit_category_{chosen}"):
            name = st.text_input("Name", value=category.name)
            kind = st.selectbox(
                "Type", TRANSACTION_TYPES, index=TRANSACTION_TYPES.index(category.type), key=f"manage_type_{chosen}"
            )
            color = st.color_picker("Colour", value=category.color)
            st.caption("Deleting a category also deletes its transactions.")
            save = st.form_submit_button("Save changes")
            delete = st.form_submit_button("Delete category")

        try:
            if save:
                local.update_category(chosen, name=name, type=kind, color=color)
                st.rerun()
            elif delete:
                removed = local.delete_category(chosen)
                st.session_state["category_notice"] = (
                    f"Deleted {category.name} and {removed} transactions."
                )
                st.rerun()
        except (InvalidRecordError, store.RecordNotFoundError) as exc:
            st.error(str(exc))


def main() -> None:
    """Render the Finance Tracker Streamlit application."""

    settings = config.get_settings()
    config.configure_logging(settings.log_level)
    currency = settings.currency_symbol
    today = date.today()

    st.set_page_config(
        page_title="Finance Tracker",
        page_icon="💰",
        layout="wide",
    )
    st.markdown(
        """
        <style>
        div[data-testid="stMetric"] {
            background: #ffffff;
            border-radius: 18px;
            border: 1px solid rgba(226, 232, 240, 0.9);
            padding: 1.15rem 1.25rem;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.title("Finance Dashboard")

    sidebar = st.sidebar
    sidebar.header("Data")
    source = sidebar.radio("Source", ["Local store", "Sample data"], index=0)

    local: store.LocalStore | None = None
    if source == "Local store":
        try:
            local = _open_store(str(settings.data_path))
        except store.StoreError as exc:
            st.error(str(exc))
            return
        categories, transactions = local.snapshot()
    else:
        seed = int(
            sidebar.number_input(
                "Random seed", value=settings.sample_seed, min_value=0, step=1, help="Deterministic RNG seed"
            )
        )
        categories, transactions = _load_sample(seed, today)

    quick_choice = sidebar.radio(
        "Quick filters",
        [*periods.PRESET_OPTIONS, "Custom"],
        index=0,
    )
    if quick_choice == "Custom":
        default = periods.month_range(today)
        date_range = _resolve_custom_range(
            sidebar.date_input("Custom date range", value=(default.start, default.end))
        )
    else:
        date_range = periods.preset_range(quick_choice, today)

    payload = insights.build_dashboard(transactions, categories, date_range, reference=today)
    current = periods.filter_by_range(transactions, date_range)["current"]
    has_comparison = payload["previous_range"] is not None

    summary = payload["summary"]
    cols = st.columns(3)
    with cols[0]:
        _render_metric("Total Income", summary["income"], currency, has_comparison=has_comparison)
    with cols[1]:
        _render_metric("Total Expenses", summary["expense"], currency, has_comparison=has_comparison)
    with cols[2]:
        _render_metric("Balance", summary["balance"], currency, has_comparison=has_comparison)

    chart_col, insight_col = st.columns([2, 1], gap="large")
    with chart_col:
        pie_tab, bar_tab, trend_tab = st.tabs(["Pie chart", "Bar chart", "Trend"])
        with pie_tab:
            st.plotly_chart(viz.plot_category_pie(payload["distribution"]), use_container_width=True)
        with bar_tab:
            st.plotly_chart(viz.plot_monthly_category_bar(payload["monthly"]), use_container_width=True)
        with trend_tab:
            st.plotly_chart(viz.plot_expense_trend(payload["trend"]), use_container_width=True)
        if has_comparison:
            st.plotly_chart(viz.plot_period_comparison(summary), use_container_width=True)
    with insight_col:
        _render_insights(payload["insights"], currency)

    st.markdown("### Transactions")
    table = export.transactions_to_frame(current, categories)
    query = st.text_input("Search descriptions", placeholder="e.g. groceries")
    shown = export.filter_by_description(table, query)
    if shown.empty:
        st.caption("No transactions available for the current filters.")
    else:
        st.dataframe(shown.sort_values("Date", ascending=False), hide_index=True, use_container_width=True)

    sidebar.subheader("Exports")
    sidebar.download_button(
        "Export CSV",
        data=export.transactions_to_csv(current, categories),
        file_name=export.export_filename("finance-report", today),
        mime="text/csv",
        disabled=table.empty,
    )

    if local is not None:
        _render_add_transaction(local)
        _render_edit_transaction(local, categories)
        _render_add_category(local)
        _render_manage_categories(local, categories)


if __name__ == "__main__":
    main()
