# File: brainboost_app/config.py
# Application configuration, read from the environment (.env supported).

import os

from dotenv import load_dotenv

load_dotenv()

# brainboost_app/ lives directly under the project root.
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

DATABASE_PATH = os.path.join(BASE_DIR, "database", "brainboost.db")


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Flask configuration for the BrainBoost quiz app."""

    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        # Fallback for development, though env is preferred
        SECRET_KEY = 'dev-secret-key-replace-in-production'

    SQLALCHEMY_DATABASE_URI = os.environ.get('SQLALCHEMY_DATABASE_URI') or f'sqlite:///{DATABASE_PATH}'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
    }
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Quiz storage: 'database' (storage_blobs table), 'file' (JSON file per key) or 'memory'
    QUIZ_STORAGE_BACKEND = os.environ.get('QUIZ_STORAGE_BACKEND', 'database')
    QUIZ_STORAGE_KEY = os.environ.get('QUIZ_STORAGE_KEY', 'brainboost-quiz-storage')
    QUIZ_STORAGE_DIR = os.environ.get('QUIZ_STORAGE_DIR') or os.path.join(BASE_DIR, 'storage')
    QUIZ_SEED_SAMPLES = _env_flag('QUIZ_SEED_SAMPLES', True)

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_DIR = os.environ.get('LOG_DIR')
    LOG_JSON = _env_flag('LOG_JSON', False)

    @classmethod
    def init_app(cls, app):
        """Create the directories the configured backends write into."""
        if app.config['SQLALCHEMY_DATABASE_URI'] == f'sqlite:///{DATABASE_PATH}':
            os.makedirs(os.path.dirname(DATABASE_PATH), exist_ok=True)
        if app.config['QUIZ_STORAGE_BACKEND'] == 'file':
            os.makedirs(app.config['QUIZ_STORAGE_DIR'], exist_ok=True)
        if app.config.get('LOG_DIR'):
            os.makedirs(app.config['LOG_DIR'], exist_ok=True)
