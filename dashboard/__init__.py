import os

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_wtf import CSRFProtect
from flask_wtf.csrf import CSRFError

load_dotenv()
db = SQLAlchemy()
csrf = CSRFProtect()

INVOICES_PATH = "/dashboard/invoices"


def _get_bool_env(var_name: str, default: bool = False) -> bool:
    """Return a boolean environment variable value."""

    value = os.getenv(var_name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _database_uri(base_dir: str) -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    # DATABASE_PATH may name the SQLite file itself or the directory that
    # should hold it (e.g. a mounted volume in container deployments).
    default_db_path = os.path.join(base_dir, "invoices.db")
    db_path = os.getenv("DATABASE_PATH", default_db_path)
    if os.path.isdir(db_path):
        db_path = os.path.join(db_path, "invoices.db")
    os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)
    return f"sqlite:///{os.path.abspath(db_path)}"


def create_app(args: list):
    """Application factory used by Flask."""
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.getenv("SECRET_KEY")
    session_cookie_secure = _get_bool_env(
        "SESSION_COOKIE_SECURE", default="--insecure-cookies" not in args
    )
    app.config.update(
        SESSION_COOKIE_SECURE=session_cookie_secure,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
    )
    # Resolve the database location eagerly so that changing the working
    # directory after app creation does not move the SQLite file.
    app.config["SQLALCHEMY_DATABASE_URI"] = _database_uri(os.getcwd())
    app.logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

    db.init_app(app)
    csrf.init_app(app)

    @app.errorhandler(CSRFError)
    def handle_csrf_error(error):
        """Report CSRF validation failures as JSON."""
        return jsonify({"message": error.description}), 400

    with app.app_context():
        # Schema migrations are managed outside this application; create
        # missing tables so a fresh database is usable straight away.
        from . import models  # noqa: F401

        db.create_all()

        from dashboard.routes.invoice_routes import invoice

        app.register_blueprint(invoice, url_prefix=INVOICES_PATH)

    return app
