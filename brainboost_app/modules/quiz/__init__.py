"""Quiz module: question store, answer evaluation, test runs and dashboard."""

from flask import Blueprint

from brainboost_app.extensions import csrf_protect

quiz_bp = Blueprint('quiz', __name__)

# JSON endpoints; form posts are still checked by FlaskForm's own CSRF token
csrf_protect.exempt(quiz_bp)

# Module Metadata
module_metadata = {
    'name': 'Quizzes',
    'category': 'Learning',
    'url_prefix': '/quiz',
    'enabled': True
}

from .routes import api  # noqa: E402,F401
