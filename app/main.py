"""
Streamlit Frontend for Trip Budget

The dashboard for planning the trip: a list of expected expenses and a
savings goal.

DESIGN PRINCIPLES:
1. The page holds no budget state of its own
2. Every change goes through the ledger or the goal tracker
3. After each change the page re-reads a full snapshot and redraws
4. Errors are shown in plain language, nothing fails silently
"""

import streamlit as st

from tripbudget.config import get_settings, validate_all_settings
from tripbudget.orchestrator import TripBudget, create_app_components
from tripbudget.presentation import (
    format_currency,
    format_percentage,
    goal_message,
    parse_amount,
    parse_quantity,
    progress_bar_value,
    remaining_message,
    subtotal_preview,
)
from tripbudget.services.storage import NotFoundError, StorageError
from tripbudget.validation import ValidationError


settings = get_settings().app

st.set_page_config(
    page_title=f"{settings.trip_name} - Trip Budget",
    page_icon="✈️",
    layout="wide",
)


@st.cache_resource
def get_budget() -> TripBudget:
    """Get or create the budget components (cached for the session)."""
    return create_app_components()


def money(amount) -> str:
    return format_currency(amount, settings.currency_symbol)


def main():
    """Main application entry point."""
    try:
        budget = get_budget()
    except StorageError as e:
        st.error(f"Could not open the budget storage: {e}")
        st.stop()

    st.title(f"✈️ {settings.trip_name}")

    if "editing_id" not in st.session_state:
        st.session_state.editing_id = None

    expenses_col, goal_col = st.columns([3, 2])
    with expenses_col:
        render_expense_form(budget)
        render_expense_table(budget)
    with goal_col:
        render_goal_section(budget)

    with st.sidebar:
        render_status(budget)


EXPENSE_INPUT_DEFAULTS = {
    "expense_description": "",
    "expense_quantity": "1",
    "expense_unit_price": "",
}


def fill_expense_inputs(description: str = "", quantity: str = "1", unit_price: str = ""):
    """
    Queue new values for the expense inputs.

    Widget state can only be written before the widgets are drawn, so the
    values are applied at the top of the next run.
    """
    st.session_state.pending_expense_inputs = {
        "expense_description": description,
        "expense_quantity": quantity,
        "expense_unit_price": unit_price,
    }


def render_expense_form(budget: TripBudget):
    """
    Add a new expense, or edit the one selected in the table.

    Plain widgets rather than st.form, so the subtotal preview follows
    every keystroke. Inputs are only cleared after a successful save.
    """
    for key, value in EXPENSE_INPUT_DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = value
    pending = st.session_state.pop("pending_expense_inputs", None)
    if pending:
        for key, value in pending.items():
            st.session_state[key] = value

    editing_id = st.session_state.editing_id
    editing = None
    if editing_id is not None:
        try:
            editing = budget.ledger.get(editing_id)
        except NotFoundError:
            st.session_state.editing_id = None

    st.subheader("Edit expense" if editing else "Add expense")

    description = st.text_input("Description", key="expense_description")
    quantity_raw = st.text_input("Quantity", key="expense_quantity")
    unit_price_raw = st.text_input("Unit price", key="expense_unit_price")

    quantity = parse_quantity(quantity_raw)
    unit_price = parse_amount(unit_price_raw)
    preview = subtotal_preview(quantity, unit_price, settings.currency_symbol)
    if preview:
        st.caption(f"Subtotal: {preview}")

    save_col, cancel_col = st.columns(2)
    submitted = save_col.button("Save changes" if editing else "Add expense")
    if editing and cancel_col.button("Cancel editing"):
        st.session_state.editing_id = None
        fill_expense_inputs()
        st.rerun()

    if not submitted:
        return

    try:
        if editing:
            budget.ledger.update(editing.id, description, quantity, unit_price)
        else:
            budget.ledger.add(description, quantity, unit_price)
    except ValidationError as e:
        for issue in e.issues:
            st.error(f"{issue.field}: {issue.message}")
        return
    except NotFoundError:
        st.session_state.editing_id = None
        st.error("That expense no longer exists.")
        return
    except StorageError as e:
        st.error(f"Could not save the expense: {e}")
        return

    st.session_state.editing_id = None
    fill_expense_inputs()
    st.rerun()


def render_expense_table(budget: TripBudget):
    """List expenses in insertion order with edit/remove actions."""
    snapshot = budget.snapshot()

    st.subheader("Expenses")
    if not snapshot.expenses:
        st.info("No expenses yet. Add the first one above.")

    for expense in snapshot.expenses:
        desc_col, qty_col, unit_col, sub_col, edit_col, remove_col = st.columns(
            [4, 1, 2, 2, 1, 1]
        )
        desc_col.write(expense.description)
        qty_col.write(str(expense.quantity))
        unit_col.write(money(expense.unit_price))
        sub_col.write(money(expense.subtotal))

        if edit_col.button("Edit", key=f"edit_{expense.id}"):
            st.session_state.editing_id = expense.id
            fill_expense_inputs(
                expense.description,
                str(expense.quantity),
                str(expense.unit_price),
            )
            st.rerun()

        if remove_col.button("Remove", key=f"remove_{expense.id}"):
            try:
                budget.ledger.remove(expense.id)
            except NotFoundError:
                st.warning("That expense was already removed.")
            except StorageError as e:
                st.error(f"Could not remove the expense: {e}")
            else:
                if st.session_state.editing_id == expense.id:
                    st.session_state.editing_id = None
                    fill_expense_inputs()
                st.rerun()

    st.markdown(f"**Total:** {money(snapshot.total)}")


def render_goal_section(budget: TripBudget):
    """Target and saved inputs plus the progress card."""
    st.subheader("Savings goal")
    goal = budget.goals.goal

    target_raw = st.text_input("Target amount", value=str(goal.target))
    if st.button("Save target"):
        try:
            budget.goals.set_target(parse_amount(target_raw))
        except StorageError as e:
            st.error(f"Could not save the target: {e}")
        else:
            st.rerun()

    saved_raw = st.text_input("Amount saved", value=str(goal.saved))
    if st.button("Save amount saved"):
        try:
            budget.goals.set_saved(parse_amount(saved_raw))
        except StorageError as e:
            st.error(f"Could not save the amount: {e}")
        else:
            st.rerun()

    snapshot = budget.snapshot()
    st.metric("Progress", format_percentage(snapshot.progress.percentage))
    st.progress(int(progress_bar_value(snapshot.progress.percentage)))
    st.write(goal_message(snapshot.message, snapshot.goal))
    st.caption(remaining_message(snapshot.goal, snapshot.progress, settings.currency_symbol))


def render_status(budget: TripBudget):
    """Backend and configuration status."""
    st.markdown("### Storage")
    st.write(f"Backend: `{budget.backend_name}`")

    status = validate_all_settings()
    for key in ("storage", "app"):
        if status.get(key, False):
            st.success(f"{key.title()} settings OK")
        else:
            st.error(f"{key.title()} settings: {status.get(f'{key}_error', 'invalid')}")


if __name__ == "__main__":
    main()
