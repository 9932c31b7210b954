from flask import Flask
from .config import config_by_name
from .extensions import db, migrate
from .errors import register_error_handlers


def create_app(config_name: str = "development", **overrides) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config.update(overrides)

    app.logger.setLevel(app.config["LOG_LEVEL"])

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)

    # Register every table with the metadata before migrations/create_all
    from . import models  # noqa: F401
    # Session hooks that settle image uploads on commit/rollback
    from .utils import media  # noqa: F401

    # -------------------------------------------------
    # Errors
    # -------------------------------------------------
    register_error_handlers(app)

    return app
