# backend/auth/services.py

from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token
from models.user_model import User
from models import db
from utils.logging import logger


def _auth_payload(user):
    token = create_access_token(identity=str(user.id))
    return {"token": token, "user": user.to_dict()}


def register_user(data):

    existing = User.query.filter_by(email=data.email).first()
    if existing:
        logger.info("Registration rejected, email already registered: %s", data.email)
        return None, "User already exists"

    user = User(
        name=data.name,
        email=data.email,
        password=generate_password_hash(data.password),
    )

    db.session.add(user)
    db.session.commit()
    logger.info("Registered user %s", user.id)

    return _auth_payload(user), None


def login_user(data):

    user = User.query.filter_by(email=data.email).first()

    if not user or not check_password_hash(user.password, data.password):
        logger.info("Failed login for %s", data.email)
        return None, "Invalid email or password"

    return _auth_payload(user), None
