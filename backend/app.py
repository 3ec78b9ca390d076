from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from models import db
from models import expense_model, user_model  # noqa: F401  (register tables)
from auth.middleware import init_jwt
from auth.routes import auth_bp
from expenses.routes import expenses_bp
from users.routes import users_bp
from config import Config, config_by_name
from utils.logging import configure_logging, logger


def register_error_handlers(app):

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return jsonify({"message": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def _server_error(e):
        db.session.rollback()
        logger.exception("Unhandled error: %s", e)
        return jsonify({"message": "Server error"}), 500


def create_app(config_class=config_by_name.get(Config.APP_ENV, Config)):
    app = Flask(__name__)
    app.config.from_object(config_class)

    configure_logging(app.config["LOG_LEVEL"], app.config.get("LOG_FILE"))

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    db.init_app(app)
    with app.app_context():
        db.create_all()
    init_jwt(app)

    app.register_blueprint(auth_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(expenses_bp)
    register_error_handlers(app)

    @app.route("/api/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok"}), 200

    logger.info("App created (env=%s)", app.config.get("APP_ENV"))
    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=app.config["DEBUG"])
