"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

import logging

from flask import Flask

from ..extensions import csrf_protect, db
from .error_handlers import register_error_handlers
from .logging_config import setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Configure the app logger (if no handlers are present) and the brainboost loggers."""

    setup_logging(
        app,
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        log_dir=app.config.get("LOG_DIR"),
        json_format=app.config.get("LOG_JSON", False),
    )

    if app.logger.handlers:
        return

    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO))
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    app.logger.addHandler(handler)
    app.logger.propagate = False
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)
    csrf_protect.init_app(app)
    register_error_handlers(app)


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)


def initialize_database(app: Flask) -> None:
    """Create the database tables the storage adapters rely on."""

    from .. import models  # noqa: F401  (registers the model metadata)

    db.create_all()
    app.logger.info("Database tables ensured.")


def initialize_stores(app: Flask) -> None:
    """Rehydrate the stores that hold application state."""

    from ..modules.quiz.interface import init_quiz_store

    store = init_quiz_store(app)
    app.logger.info("Quiz store initialized with %d questions.", len(store))
