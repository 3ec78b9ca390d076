# backend/auth/middleware.py

from flask_jwt_extended import JWTManager

from models import db
from models.user_model import User
from utils.logging import logger
from utils.responses import message


def init_jwt(app) -> JWTManager:
    """
    Bearer-token guard: every @jwt_required() route gets `current_user`
    resolved from the token identity, and every failure is a generic 401.
    """
    jwt = JWTManager(app)

    @jwt.user_identity_loader
    def _identity(user_id):
        return str(user_id)

    @jwt.user_lookup_loader
    def _lookup_user(_jwt_header, jwt_data):
        try:
            user_id = int(jwt_data["sub"])
        except (KeyError, TypeError, ValueError):
            return None
        return db.session.get(User, user_id)

    @jwt.user_lookup_error_loader
    def _unknown_user(_jwt_header, jwt_data):
        logger.warning("Token for unknown user %s", jwt_data.get("sub"))
        return message("Not authorized, user not found", 401)

    @jwt.unauthorized_loader
    def _missing_token(reason):
        return message("Not authorized, no token", 401)

    @jwt.invalid_token_loader
    def _invalid_token(reason):
        logger.info("Rejected invalid token: %s", reason)
        return message("Not authorized, token failed", 401)

    @jwt.expired_token_loader
    def _expired_token(_jwt_header, _jwt_data):
        return message("Not authorized, token expired", 401)

    return jwt
