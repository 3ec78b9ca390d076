# frontend/streamlit_app.py
# Run with (after `pip install -e .`): streamlit run frontend/streamlit_app.py

from datetime import datetime

import plotly.express as px
import streamlit as st

from frontend.api_client import ApiClient, ApiError
from frontend.views import (
    CATEGORIES,
    PAYMENT_METHODS,
    apply_filters,
    dashboard_summary,
    expense_form_defaults,
    expenses_frame,
    expenses_to_csv,
    export_filename,
    format_currency,
    format_date,
    monthly_frame,
    total_amount,
    validate_expense_form,
    validate_profile_form,
)

st.set_page_config(page_title="Expense Tracker", layout="wide", page_icon="💸")

PAGES = ["📊 Dashboard", "💳 Expenses", "👤 Profile"]


# ---------------- Session State ----------------
def init_session_state():
    defaults = {
        "token": None,
        "user": None,
        "page": PAGES[0],
        "editing_expense_id": None,
        "pending_delete_id": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def api() -> ApiClient:
    return ApiClient(token=st.session_state.token)


def logout():
    for key in ("token", "user", "editing_expense_id", "pending_delete_id"):
        st.session_state[key] = None


# ---------------- Authentication ----------------
def handle_auth(name, email, password, is_register=False):
    client = api()
    try:
        if is_register:
            user = client.register(name, email, password)
        else:
            user = client.login(email, password)
    except ApiError as e:
        st.error(f"❌ {e.message}")
        return False

    st.session_state.token = client.token
    st.session_state.user = user
    st.success("✅ Login successful!")
    return True


# ---------------- Sidebar (navigation) ----------------
def render_sidebar():
    with st.sidebar:
        st.title("💰 Expense Tracker")

        if st.session_state.token:
            user = st.session_state.user or {}
            st.success(f"Logged in as **{user.get('name', '')}**")
            st.radio("Navigate", PAGES, key="page")
            if st.button("🚪 Logout", use_container_width=True, key="logout_btn"):
                logout()
                st.rerun()
            return

        auth_tab = st.radio("Action", ["Login", "Register"], horizontal=True, key="auth_tab")
        with st.form("auth_form"):
            name = ""
            if auth_tab == "Register":
                name = st.text_input("🙂 Name")
            email = st.text_input("📧 Email")
            password = st.text_input("🔒 Password", type="password")
            if st.form_submit_button("Submit", use_container_width=True):
                if not email or not password or (auth_tab == "Register" and not name):
                    st.warning("Please fill in all fields")
                elif handle_auth(name, email, password, auth_tab == "Register"):
                    st.rerun()


# ---------------- Dashboard ----------------
def render_dashboard():
    user = st.session_state.user or {}
    st.header(f"Welcome back, {user.get('name', '')}! 👋")

    client = api()
    try:
        stats = client.get_stats()
        expenses = client.list_expenses()
    except ApiError as e:
        st.error(f"Failed to load dashboard data: {e.message}")
        return

    summary = dashboard_summary(stats, expenses)

    col1, col2, col3 = st.columns(3)
    col1.metric("Total Expenses", format_currency(summary["total"]))
    col2.metric("Categories", summary["category_count"])
    col3.metric("This Month", summary["this_month_count"])

    left, right = st.columns(2)
    with left:
        st.subheader("🕒 Recent Expenses")
        if not summary["recent"]:
            st.info("No expenses yet. Add your first expense on the Expenses page!")
        for expense in summary["recent"]:
            st.markdown(
                f"**{expense['description']}** · {expense['category']} · "
                f"{format_date(expense['date'])} · {format_currency(expense['amount'])}"
            )

    with right:
        st.subheader("📂 Category Breakdown")
        if not summary["top_categories"]:
            st.info("No category data yet")
        for cat in summary["top_categories"]:
            st.write(f"{cat['category']}: {format_currency(cat['total'])} ({cat['share']}%)")
            st.progress(min(int(cat["share"]), 100))

    monthly = monthly_frame(stats)
    if not monthly.empty:
        fig = px.bar(monthly, x="Month", y="Total", title="Last 6 months")
        st.plotly_chart(fig, use_container_width=True)


# ---------------- Expense form (add / edit) ----------------
def render_expense_form(form_key, expense=None):
    """Returns the payload when submitted and valid, else None."""
    defaults = expense_form_defaults(expense)
    with st.form(form_key, clear_on_submit=expense is None):
        col_a, col_b = st.columns(2)
        with col_a:
            amount = st.number_input("💰 Amount (₹)", min_value=0.0, value=defaults["amount"],
                                     format="%.2f", step=10.0)
            category = st.selectbox("📂 Category", CATEGORIES,
                                    index=CATEGORIES.index(defaults["category"]))
            spent_on = st.date_input("📅 Date", value=defaults["date"])
        with col_b:
            description = st.text_input("📝 Description", value=defaults["description"])
            payment = st.selectbox("💳 Payment Method", PAYMENT_METHODS,
                                   index=PAYMENT_METHODS.index(defaults["paymentMethod"]))

        label = "💾 Save Changes" if expense else "➕ Add Expense"
        if not st.form_submit_button(label, use_container_width=True):
            return None

    errors = validate_expense_form(amount, description)
    if errors:
        for err in errors:
            st.error(err)
        return None

    return {
        "amount": float(amount),
        "category": category,
        "description": description.strip(),
        "date": datetime.combine(spent_on, datetime.min.time()).isoformat(),
        "paymentMethod": payment,
    }


# ---------------- Expenses ----------------
def render_expenses():
    st.header("💳 Expenses")

    client = api()
    try:
        expenses = client.list_expenses()
    except ApiError as e:
        st.error(f"Failed to load expenses: {e.message}")
        return

    with st.expander("➕ Add Expense", expanded=not expenses):
        payload = render_expense_form("add_expense")
        if payload:
            try:
                client.create_expense(payload)
            except ApiError as e:
                st.error(f"Failed to add expense: {e.message}")
            else:
                st.success("Expense added successfully!")
                st.rerun()

    col1, col2, col3, col4 = st.columns(4)
    search = col1.text_input("🔍 Search", key="filter_search")
    category = col2.selectbox("📂 Category", [""] + CATEGORIES, key="filter_category",
                              format_func=lambda c: c or "All categories")
    start = col3.date_input("From", value=None, key="filter_start")
    end = col4.date_input("To", value=None, key="filter_end")

    filtered = apply_filters(expenses, search=search, category=category,
                             start_date=start, end_date=end)

    count = len(filtered)
    st.caption(
        f"{count} expense{'s' if count != 1 else ''} • Total: {format_currency(total_amount(filtered))}"
    )
    st.download_button(
        "📥 Export CSV",
        data=expenses_to_csv(filtered),
        file_name=export_filename(),
        mime="text/csv",
        disabled=not filtered,
    )

    if not filtered:
        st.info("No expenses found")
        return

    st.dataframe(expenses_frame(filtered), use_container_width=True, hide_index=True)

    for expense in filtered:
        render_expense_row(client, expense)


def render_expense_row(client, expense):
    expense_id = expense["id"]
    cols = st.columns([5, 2, 1, 1])
    cols[0].write(f"**{expense['description']}** · {expense['category']} · {format_date(expense['date'])}")
    cols[1].write(format_currency(expense["amount"]))
    if cols[2].button("✏️", key=f"edit_{expense_id}"):
        st.session_state.editing_expense_id = expense_id
    if cols[3].button("🗑️", key=f"delete_{expense_id}"):
        st.session_state.pending_delete_id = expense_id

    if st.session_state.pending_delete_id == expense_id:
        st.warning("Are you sure you want to delete this expense?")
        yes, no = st.columns(2)
        if yes.button("Delete", key=f"confirm_delete_{expense_id}"):
            try:
                client.delete_expense(expense_id)
            except ApiError as e:
                st.error(f"Failed to delete expense: {e.message}")
            else:
                st.session_state.pending_delete_id = None
                st.success("Expense deleted successfully!")
                st.rerun()
        if no.button("Cancel", key=f"cancel_delete_{expense_id}"):
            st.session_state.pending_delete_id = None
            st.rerun()

    if st.session_state.editing_expense_id == expense_id:
        payload = render_expense_form(f"edit_expense_{expense_id}", expense)
        if payload:
            try:
                client.update_expense(expense_id, payload)
            except ApiError as e:
                st.error(f"Failed to update expense: {e.message}")
            else:
                st.session_state.editing_expense_id = None
                st.success("Expense updated successfully!")
                st.rerun()


# ---------------- Profile ----------------
def render_profile():
    st.header("👤 Profile")

    client = api()
    try:
        user = client.get_profile()
    except ApiError as e:
        st.error(f"Failed to load profile: {e.message}")
        return

    initial = (user.get("name") or "?")[:1].upper()
    st.markdown(f"### {initial} · {user.get('name')}")
    if user.get("createdAt"):
        since = datetime.fromisoformat(user["createdAt"]).strftime("%B %Y")
        st.caption(f"Member since {since}")

    editing = st.toggle("Edit Profile", key="profile_editing")
    with st.form("profile_form"):
        name = st.text_input("Full Name *", value=user.get("name") or "", disabled=not editing)
        email = st.text_input("Email Address *", value=user.get("email") or "", disabled=not editing)
        phone = st.text_input("Phone Number", value=user.get("phone") or "",
                              placeholder="+91 1234567890", disabled=not editing)
        bio = st.text_area("Bio", value=user.get("bio") or "",
                           placeholder="Tell us about yourself...", disabled=not editing)
        submitted = st.form_submit_button("Save Changes", disabled=not editing)

    if not submitted:
        return

    errors = validate_profile_form(name, email)
    if errors:
        st.error(errors[0])
        return

    try:
        updated = client.update_profile(name=name, email=email, phone=phone, bio=bio)
    except ApiError as e:
        st.error(e.message or "Failed to update profile")
        return

    st.session_state.user = {**(st.session_state.user or {}), **updated}
    st.success("Profile updated successfully!")


def main():
    init_session_state()
    render_sidebar()

    if not st.session_state.token:
        st.title("💰 Expense Tracker")
        st.info("🔐 Please login or register from the sidebar to continue")
        return

    page = st.session_state.page
    if page == PAGES[0]:
        render_dashboard()
    elif page == PAGES[1]:
        render_expenses()
    else:
        render_profile()


if __name__ == "__main__":
    main()
