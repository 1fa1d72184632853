"""Public entry points of the quiz module for the app factory and other modules."""

from flask import Flask, current_app

from .config import QuizConfig
from .data import build_sample_questions
from .services.persistence import build_adapter
from .services.quiz_store import QuizStore

EXTENSION_KEY = 'quiz_store'


def init_quiz_store(app: Flask) -> QuizStore:
    """Build the app's quiz store from its config, rehydrate it and attach it."""
    store = QuizStore(
        build_adapter(app),
        storage_key=app.config.get('QUIZ_STORAGE_KEY') or QuizConfig.STORAGE_KEY,
        seed=build_sample_questions if app.config.get('QUIZ_SEED_SAMPLES', True) else None,
    )
    store.init()
    app.extensions[EXTENSION_KEY] = store
    return store


def get_quiz_store() -> QuizStore:
    """The quiz store of the current app."""
    return current_app.extensions[EXTENSION_KEY]


def dispose_quiz_store(app: Flask) -> None:
    store = app.extensions.pop(EXTENSION_KEY, None)
    if store is not None:
        store.dispose()
