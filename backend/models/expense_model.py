from models import db
from utils.dates import utcnow


CATEGORIES = (
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
)

PAYMENT_METHODS = ("Cash", "Credit Card", "Debit Card", "UPI", "Net Banking", "Other")


class Expense(db.Model):
    """
    A single spending entry owned by one user.
    Ownership is checked by the route layer on every read/update/delete.
    """

    __tablename__ = "expenses"

    id = db.Column(db.Integer, primary_key=True)

    # Ownership
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)

    amount = db.Column(db.Float, nullable=False)
    category = db.Column(db.String(40), nullable=False)
    description = db.Column(db.Text, nullable=False)
    date = db.Column(db.DateTime, nullable=False, default=utcnow)
    payment_method = db.Column(db.String(20), nullable=False)

    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    __table_args__ = (
        db.Index("ix_expenses_user_date", "user_id", "date"),
        db.Index("ix_expenses_user_category", "user_id", "category"),
        db.CheckConstraint("amount >= 0", name="ck_expenses_amount_non_negative"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "amount": self.amount,
            "category": self.category,
            "description": self.description,
            "date": self.date.isoformat() if self.date else None,
            "paymentMethod": self.payment_method,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Expense {self.id} {self.amount} {self.category}>"
