from __future__ import annotations

from typing import List, Optional, Tuple

from models import db
from models.expense_model import Expense
from utils.dates import utcnow
from utils.logging import logger

from .schemas import ExpenseCreateSchema, ExpenseFilterSchema, ExpenseUpdateSchema


def build_expense_query(user_id: int, filters: Optional[ExpenseFilterSchema] = None):
    """
    Owner-scoped query with the optional list filters applied.
    Every bound is inclusive.
    """
    q = Expense.query.filter(Expense.user_id == user_id)
    if filters is None:
        return q

    if filters.search:
        q = q.filter(Expense.description.icontains(filters.search, autoescape=True))
    if filters.category:
        q = q.filter(Expense.category == filters.category)
    if filters.start_date is not None:
        q = q.filter(Expense.date >= filters.start_date)
    if filters.end_date is not None:
        q = q.filter(Expense.date <= filters.end_date)
    if filters.min_amount is not None:
        q = q.filter(Expense.amount >= filters.min_amount)
    if filters.max_amount is not None:
        q = q.filter(Expense.amount <= filters.max_amount)
    return q


def list_expenses(user_id: int, filters: Optional[ExpenseFilterSchema] = None) -> List[Expense]:
    return (
        build_expense_query(user_id, filters)
        .order_by(Expense.date.desc(), Expense.id.desc())
        .all()
    )


def create_expense(user_id: int, data: ExpenseCreateSchema) -> Expense:
    expense = Expense(
        user_id=user_id,
        amount=data.amount,
        category=data.category,
        description=data.description,
        date=data.date or utcnow(),
        payment_method=data.payment_method,
    )
    db.session.add(expense)
    db.session.commit()
    logger.info("User %s created expense %s", user_id, expense.id)
    return expense


def find_owned_expense(expense_id: int, user_id: int) -> Tuple[Optional[Expense], Optional[tuple]]:
    """
    Returns (expense, None) or (None, (message, status)).
    A missing row is 404; a row owned by someone else is 401.
    """
    expense = db.session.get(Expense, expense_id)
    if expense is None:
        return None, ("Expense not found", 404)
    if expense.user_id != user_id:
        logger.warning(
            "User %s attempted to access expense %s owned by user %s",
            user_id,
            expense_id,
            expense.user_id,
        )
        return None, ("Not authorized", 401)
    return expense, None


def update_expense(expense: Expense, data: ExpenseUpdateSchema) -> Expense:
    for field, value in data.changes().items():
        setattr(expense, field, value)
    db.session.commit()
    logger.info("Updated expense %s", expense.id)
    return expense


def delete_expense(expense: Expense) -> None:
    expense_id = expense.id
    db.session.delete(expense)
    db.session.commit()
    logger.info("Deleted expense %s", expense_id)
