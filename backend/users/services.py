# backend/users/services.py

from models import db
from models.user_model import User
from utils.logging import logger


def update_profile(user, data):
    """
    Apply a partial profile change. Name and email are only replaced by
    non-empty values; bio, phone and avatar accept an empty string to clear.
    """
    changes = data.model_dump(exclude_unset=True)

    email = changes.get("email")
    if email and email != user.email:
        taken = User.query.filter(User.email == email, User.id != user.id).first()
        if taken:
            return None, "Email already in use"

    user.name = changes.get("name") or user.name
    user.email = email or user.email
    for field in ("bio", "phone", "avatar"):
        if changes.get(field) is not None:
            setattr(user, field, changes[field])

    db.session.commit()
    logger.info("Updated profile of user %s", user.id)

    return user, None
