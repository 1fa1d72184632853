from dotenv import load_dotenv
import os

# Load environment variables from .env file
load_dotenv()

from brainboost_app import create_app
from brainboost_app.modules.quiz.interface import dispose_quiz_store

app = create_app()

if __name__ == '__main__':
    try:
        app.run(
            host=os.environ.get('BRAINBOOST_HOST', '127.0.0.1'),
            port=int(os.environ.get('BRAINBOOST_PORT', '5000')),
            debug=os.environ.get('FLASK_DEBUG', '').lower() in ('1', 'true'),
        )
    finally:
        dispose_quiz_store(app)
