from __future__ import annotations

from datetime import datetime
from typing import Optional

from dateutil.relativedelta import relativedelta
from sqlalchemy import extract, func

from models import db
from models.expense_model import Expense
from utils.dates import utcnow

MONTHLY_WINDOW_MONTHS = 6


def total_amount(user_id: int) -> float:
    total = (
        db.session.query(func.sum(Expense.amount))
        .filter(Expense.user_id == user_id)
        .scalar()
    )
    return float(total or 0)


def totals_by_category(user_id: int) -> list:
    total = func.sum(Expense.amount).label("total")
    rows = (
        db.session.query(Expense.category, total, func.count(Expense.id).label("count"))
        .filter(Expense.user_id == user_id)
        .group_by(Expense.category)
        .order_by(total.desc(), Expense.category)
        .all()
    )
    return [
        {"category": row.category, "total": float(row.total or 0), "count": int(row.count)}
        for row in rows
    ]


def monthly_totals(user_id: int, since: datetime) -> list:
    year = extract("year", Expense.date).label("year")
    month = extract("month", Expense.date).label("month")
    rows = (
        db.session.query(
            year,
            month,
            func.sum(Expense.amount).label("total"),
            func.count(Expense.id).label("count"),
        )
        .filter(Expense.user_id == user_id, Expense.date >= since)
        .group_by(year, month)
        .order_by(year, month)
        .all()
    )
    return [
        {
            "year": int(row.year),
            "month": int(row.month),
            "total": float(row.total or 0),
            "count": int(row.count),
        }
        for row in rows
    ]


def compute_stats(user_id: int, now: Optional[datetime] = None) -> dict:
    """
    Dashboard statistics for one user:
    - totalExpenses: sum of every amount
    - byCategory: sum and count per category, largest first
    - monthlyExpenses: sum and count per (year, month) over the trailing
      six months, oldest first
    """
    now = now or utcnow()
    since = now - relativedelta(months=MONTHLY_WINDOW_MONTHS)
    return {
        "totalExpenses": total_amount(user_id),
        "byCategory": totals_by_category(user_id),
        "monthlyExpenses": monthly_totals(user_id, since),
    }
