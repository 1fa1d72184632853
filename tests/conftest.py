import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from brainboost_app import create_app, db
from brainboost_app.config import Config
from brainboost_app.modules.quiz.interface import dispose_quiz_store
from brainboost_app.modules.quiz.services.persistence import MemoryAdapter
from brainboost_app.modules.quiz.services.quiz_store import QuizStore


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'connect_args': {'check_same_thread': False}
    }
    WTF_CSRF_ENABLED = False
    QUIZ_STORAGE_BACKEND = 'memory'
    QUIZ_STORAGE_KEY = 'brainboost-test-storage'
    QUIZ_SEED_SAMPLES = True
    LOG_DIR = None


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        dispose_quiz_store(app)
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def adapter():
    return MemoryAdapter()


@pytest.fixture
def store(adapter):
    """An initialized store over an empty memory adapter, without sample data."""
    store = QuizStore(adapter, storage_key='test-key', seed=None)
    store.init()
    yield store
    store.dispose()


@pytest.fixture
def multi_choice_question():
    return {
        'question': 'Which of these are primary colours?',
        'type': 'multi-choice',
        'options': [
            {'key': 'a', 'text': 'Red'},
            {'key': 'b', 'text': 'Green'},
            {'key': 'c', 'text': 'Blue'},
        ],
        'answer': ['a', 'c'],
        'explanation': 'In this quiz red and blue count as primaries.',
        'difficulty': 'easy',
        'tags': ['colours'],
    }


@pytest.fixture
def composite_question():
    return {
        'question': 'Match each animal to its class.',
        'type': 'composite',
        'compositeOptions': {
            'statements': [
                {'id': 's1', 'text': 'Frog'},
                {'id': 's2', 'text': 'Eagle'},
            ],
            'choices': [
                {'key': 'x', 'text': 'Amphibian'},
                {'key': 'y', 'text': 'Bird'},
            ],
        },
        'answer': {'s1': 'x', 's2': 'y'},
        'explanation': 'Frogs are amphibians and eagles are birds.',
    }
