import os
import re
from datetime import timedelta

from dotenv import load_dotenv

# load .env from backend folder
basedir = os.path.abspath(os.path.dirname(__file__))
load_dotenv(os.path.join(basedir, ".env"))


def parse_lifetime(value, default=timedelta(days=30)):
    """
    Token lifetime from env: "30d", "12h", "45m", "90s" or plain seconds.
    """
    if value is None or not str(value).strip():
        return default
    match = re.fullmatch(r"\s*(\d+)\s*([dhms]?)\s*", str(value).lower())
    if not match:
        raise ValueError(f"Invalid token lifetime: {value!r}")
    amount, unit = int(match.group(1)), match.group(2) or "s"
    return {
        "d": timedelta(days=amount),
        "h": timedelta(hours=amount),
        "m": timedelta(minutes=amount),
        "s": timedelta(seconds=amount),
    }[unit]


class Config:

    # -------------------------
    # Flask core
    # -------------------------
    SECRET_KEY = os.getenv("SECRET_KEY", "fallback-secret")
    APP_ENV = os.getenv("APP_ENV", "development")
    DEBUG = APP_ENV == "development"
    TESTING = False
    PORT = int(os.getenv("PORT", "5000"))

    # -------------------------
    # Database
    # -------------------------
    DB_USER = os.getenv("DB_USER")
    DB_PASSWORD = os.getenv("DB_PASSWORD")
    DB_HOST = os.getenv("DB_HOST")
    DB_PORT = os.getenv("DB_PORT")
    DB_NAME = os.getenv("DB_NAME")

    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI") or os.getenv("DATABASE_URL")
    if not SQLALCHEMY_DATABASE_URI:
        if all([DB_USER, DB_PASSWORD, DB_HOST, DB_PORT, DB_NAME]):
            SQLALCHEMY_DATABASE_URI = (
                f"mysql+pymysql://{DB_USER}:{DB_PASSWORD}"
                f"@{DB_HOST}:{DB_PORT}/{DB_NAME}"
            )
        else:
            SQLALCHEMY_DATABASE_URI = f"sqlite:///{os.path.join(basedir, 'expense_tracker.db')}"

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # -------------------------
    # JWT
    # -------------------------
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = parse_lifetime(os.getenv("JWT_EXPIRE"))
    JWT_TOKEN_LOCATION = ["headers"]

    # -------------------------
    # HTTP
    # -------------------------
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    # -------------------------
    # Logging
    # -------------------------
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE")


class ProductionConfig(Config):
    DEBUG = False


class TestConfig(Config):
    APP_ENV = "testing"
    DEBUG = False
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-secret-key-that-is-long-enough-for-hs256"
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    LOG_LEVEL = "WARNING"
    LOG_FILE = None


config_by_name = {
    "development": Config,
    "production": ProductionConfig,
    "testing": TestConfig,
}
