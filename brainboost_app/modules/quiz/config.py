# File: brainboost_app/modules/quiz/config.py


class QuizConfig:
    """
    Default settings for the quiz module.
    """
    STORAGE_KEY = 'brainboost-quiz-storage'
    SCHEMA_VERSION = 2

    SINGLE_CHOICE = 'single-choice'
    MULTI_CHOICE = 'multi-choice'
    TRUE_FALSE = 'true-false'
    COMPOSITE = 'composite'

    QUESTION_TYPES = (SINGLE_CHOICE, MULTI_CHOICE, TRUE_FALSE, COMPOSITE)
    DIFFICULTIES = ('easy', 'medium', 'hard')

    MIN_OPTIONS = 2

    SCORE_CORRECT = 100
    SCORE_INCORRECT = 0

    # (label, inclusive upper bound) for the dashboard's score distribution
    SCORE_BUCKETS = (
        ('0-20%', 20),
        ('21-40%', 40),
        ('41-60%', 60),
        ('61-80%', 80),
        ('81-100%', 100),
    )
