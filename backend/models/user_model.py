# backend/models/user_model.py

from sqlalchemy.orm import validates

from models import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(150), unique=True, index=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    bio = db.Column(db.Text, nullable=True)
    phone = db.Column(db.String(32), nullable=True)
    avatar = db.Column(db.String(500), nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    expenses = db.relationship("Expense", backref="user", lazy=True)

    @validates("email")
    def _lowercase_email(self, key, value):
        return value.strip().lower() if value else value

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "bio": self.bio,
            "phone": self.phone,
            "avatar": self.avatar,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }

    def to_public_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "bio": self.bio,
            "phone": self.phone,
            "avatar": self.avatar,
        }

    def __repr__(self):
        return f"<User {self.email}>"


def _iso(value):
    return value.isoformat() if value else None
