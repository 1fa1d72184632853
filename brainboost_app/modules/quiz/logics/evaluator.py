# File: brainboost_app/modules/quiz/logics/evaluator.py
# Answer evaluation: (question, submitted answer) -> correct or not.

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Dict

from pydantic import ValidationError as PydanticValidationError

from brainboost_app.core.logging_config import get_logger

from ..config import QuizConfig
from ..schemas import QUESTION_ADAPTER

logger = get_logger('quiz.evaluator')


def _single_choice(question, submitted: Any) -> bool:
    return isinstance(submitted, str) and submitted == question.answer


def _true_false(question, submitted: Any) -> bool:
    # bool only: 1, 0 and "true" are not accepted as booleans
    return isinstance(submitted, bool) and submitted == question.answer


def sorted_positional_match(expected, submitted: Any) -> bool:
    """Compare two key lists by sorting both and walking them in step.

    This is not set equality: a submission carrying a duplicate key has a
    different length and is rejected.
    """
    if not isinstance(submitted, (list, tuple)):
        return False
    if len(expected) != len(submitted):
        return False
    try:
        pairs = zip(sorted(expected), sorted(submitted))
        return all(left == right for left, right in pairs)
    except TypeError:
        # mixed, unorderable key types
        return False


def _multi_choice(question, submitted: Any) -> bool:
    return sorted_positional_match(question.answer, submitted)


def _composite(question, submitted: Any) -> bool:
    if not isinstance(submitted, Mapping):
        return False
    expected = question.answer
    if len(expected) != len(submitted):
        return False
    return all(key in submitted and submitted[key] == value for key, value in expected.items())


EVALUATORS: Dict[str, Callable[[Any, Any], bool]] = {
    QuizConfig.SINGLE_CHOICE: _single_choice,
    QuizConfig.MULTI_CHOICE: _multi_choice,
    QuizConfig.TRUE_FALSE: _true_false,
    QuizConfig.COMPOSITE: _composite,
}

_missing_types = set(QuizConfig.QUESTION_TYPES) - set(EVALUATORS)
if _missing_types:
    raise RuntimeError(f"No answer evaluator registered for question types: {sorted(_missing_types)}")


def is_correct(question, submitted_answer: Any) -> bool:
    """
    Return True when ``submitted_answer`` matches the question's canonical answer.

    ``question`` is a parsed question model or its dict form. Never raises:
    a missing answer, a malformed question or a shape that does not fit the
    question type all count as incorrect.
    """
    if submitted_answer is None:
        return False

    if isinstance(question, Mapping):
        try:
            question = QUESTION_ADAPTER.validate_python(question)
        except PydanticValidationError as exc:
            logger.warning("Cannot evaluate malformed question %s: %s", question.get('id'), exc.error_count())
            return False

    evaluator = EVALUATORS.get(getattr(question, 'type', None))
    if evaluator is None:
        logger.warning("No evaluator for question type %r", getattr(question, 'type', None))
        return False

    try:
        return bool(evaluator(question, submitted_answer))
    except Exception:
        logger.exception("Evaluator for %s failed on question %s", question.type, getattr(question, 'id', None))
        return False
