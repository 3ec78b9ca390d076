"""
Presentation helpers for the Streamlit pages.

Everything here is plain data in, plain data out, so pages stay thin and the
logic can be tested without a running Streamlit session.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Iterable, List, Optional

import pandas as pd

CATEGORIES = [
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Personal",
    "Other",
]

PAYMENT_METHODS = ["Cash", "Credit Card", "Debit Card", "UPI", "Net Banking", "Other"]

CSV_COLUMNS = ["Date", "Description", "Category", "Amount", "Payment Method"]

_EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")


def _as_date(value) -> Optional[date]:
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00")).date()


def format_currency(amount) -> str:
    return f"₹{float(amount or 0):,.2f}"


def format_date(value) -> str:
    d = _as_date(value)
    return f"{d.day} {d.strftime('%b %Y')}" if d else ""


def apply_filters(expenses: Iterable[dict], search: str = "", category: str = "",
                  start_date=None, end_date=None) -> List[dict]:
    """Client-side re-filtering of an already fetched expense list."""
    filtered = list(expenses)

    if search:
        needle = search.lower()
        filtered = [e for e in filtered if needle in (e.get("description") or "").lower()]

    if category:
        filtered = [e for e in filtered if e.get("category") == category]

    start = _as_date(start_date)
    if start:
        filtered = [e for e in filtered if _as_date(e.get("date")) >= start]

    end = _as_date(end_date)
    if end:
        filtered = [e for e in filtered if _as_date(e.get("date")) <= end]

    return filtered


def total_amount(expenses: Iterable[dict]) -> float:
    return sum(float(e.get("amount") or 0) for e in expenses)


def top_categories(stats: dict, limit: int = 5) -> List[dict]:
    total = float(stats.get("totalExpenses") or 0)
    rows = []
    for cat in (stats.get("byCategory") or [])[:limit]:
        share = (float(cat["total"]) / total * 100) if total > 0 else 0.0
        rows.append({**cat, "share": round(share, 1)})
    return rows


def dashboard_summary(stats: Optional[dict], expenses: List[dict], today: Optional[date] = None) -> dict:
    stats = stats or {}
    today = today or date.today()
    this_month = next(
        (
            m for m in stats.get("monthlyExpenses") or []
            if m.get("year") == today.year and m.get("month") == today.month
        ),
        None,
    )
    return {
        "total": float(stats.get("totalExpenses") or 0),
        "category_count": len(stats.get("byCategory") or []),
        "this_month_count": this_month["count"] if this_month else 0,
        "recent": list(expenses)[:5],
        "top_categories": top_categories(stats),
    }


def monthly_frame(stats: Optional[dict]) -> pd.DataFrame:
    rows = [
        {"Month": date(m["year"], m["month"], 1).strftime("%b %Y"), "Total": m["total"]}
        for m in (stats or {}).get("monthlyExpenses") or []
    ]
    return pd.DataFrame(rows, columns=["Month", "Total"])


def expenses_frame(expenses: Iterable[dict]) -> pd.DataFrame:
    rows = [
        {
            "Date": format_date(e.get("date")),
            "Description": e.get("description"),
            "Category": e.get("category"),
            "Amount": float(e.get("amount") or 0),
            "Payment Method": e.get("paymentMethod"),
        }
        for e in expenses
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def expenses_to_csv(expenses: Iterable[dict]) -> str:
    return expenses_frame(expenses).to_csv(index=False)


def export_filename(today: Optional[date] = None) -> str:
    return f"expenses_{(today or date.today()).isoformat()}.csv"


def expense_form_defaults(expense: Optional[dict] = None) -> dict:
    expense = expense or {}
    return {
        "amount": float(expense.get("amount") or 0.0),
        "category": expense.get("category") or CATEGORIES[0],
        "description": expense.get("description") or "",
        "date": _as_date(expense.get("date")) or date.today(),
        "paymentMethod": expense.get("paymentMethod") or PAYMENT_METHODS[0],
    }


def validate_expense_form(amount, description) -> List[str]:
    errors = []
    if not description or not str(description).strip():
        errors.append("Please fill in all required fields")
    if amount is None or float(amount) <= 0:
        errors.append("Amount must be greater than 0")
    return errors


def validate_profile_form(name, email) -> List[str]:
    if not (name or "").strip() or not (email or "").strip():
        return ["Name and email are required"]
    if not _EMAIL_RE.match(email.strip()):
        return ["Please enter a valid email"]
    return []
