"""
One-time migration of persisted quiz data to the current schema.

Earlier revisions of the app stored their state in several shapes:

- the store envelope ``{"state": {"quizzes": [...]}, "version": 0}``, where each
  quiz holds its own ``questions`` list;
- ``{"questions": [...]}`` or a bare list of questions or quizzes;
- composite questions whose ``compositeOptions`` is a flat list of statement
  strings, answered by picking one (or several) of the ``options``.

``migrate_document`` turns any of these into ``{"version": 2, "questions":
[...]}``. Quizzes are flattened into their questions, tagged with the quiz
title. Flat composite questions become single- or multi-choice questions with
the statements moved into ``preamble``, which keeps their answers evaluating
the same way.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

from brainboost_app.core.logging_config import get_logger

from ..config import QuizConfig

logger = get_logger('quiz.migration')


def empty_document() -> Dict[str, Any]:
    return {'version': QuizConfig.SCHEMA_VERSION, 'questions': []}


def load_document(raw: Optional[str]) -> Tuple[Dict[str, Any], bool]:
    """Decode a stored blob and migrate it.

    Returns the current-schema document and whether a migration took place.
    An absent or undecodable blob yields an empty document.
    """
    if raw is None or not raw.strip():
        return empty_document(), False
    try:
        data = json.loads(raw)
    except ValueError as exc:
        logger.error("Stored quiz blob is not valid JSON, starting empty: %s", exc)
        return empty_document(), False
    return migrate_document(data)


def is_current(data: Any) -> bool:
    return (
        isinstance(data, dict)
        and data.get('version') == QuizConfig.SCHEMA_VERSION
        and isinstance(data.get('questions'), list)
    )


def migrate_document(data: Any) -> Tuple[Dict[str, Any], bool]:
    if is_current(data):
        return {'version': QuizConfig.SCHEMA_VERSION, 'questions': list(data['questions'])}, False

    source_version = data.get('version') if isinstance(data, dict) else None
    if isinstance(data, dict) and isinstance(data.get('state'), dict):
        data = data['state']

    if isinstance(data, dict):
        if isinstance(data.get('quizzes'), list):
            records = data['quizzes']
        elif isinstance(data.get('questions'), list):
            records = data['questions']
        else:
            logger.warning("Stored quiz blob has no questions or quizzes, starting empty")
            records = []
    elif isinstance(data, list):
        records = data
    else:
        logger.warning("Unrecognised stored quiz blob of type %s, starting empty", type(data).__name__)
        records = []

    questions: List[Dict[str, Any]] = []
    for record in records:
        if is_quiz(record):
            questions.extend(flatten_quiz(record))
        elif isinstance(record, dict):
            questions.append(migrate_question(record))

    logger.info(
        "Migrated stored quiz data from version %s: %d records -> %d questions",
        source_version, len(records), len(questions),
    )
    return {'version': QuizConfig.SCHEMA_VERSION, 'questions': questions}, True


def is_quiz(record: Any) -> bool:
    return isinstance(record, dict) and isinstance(record.get('questions'), list) and 'type' not in record


def flatten_quiz(quiz: Dict[str, Any]) -> List[Dict[str, Any]]:
    # The quiz-level lastResult/attempts describe the whole quiz, not a question
    title = str(quiz.get('title') or '').strip()
    flattened = []
    for record in quiz['questions']:
        if not isinstance(record, dict):
            continue
        question = migrate_question(record)
        tags = list(question.get('tags') or [])
        if title and title not in tags:
            tags.append(title)
        question['tags'] = tags
        flattened.append(question)
    return flattened


def migrate_question(record: Dict[str, Any]) -> Dict[str, Any]:
    question = dict(record)
    if question.get('type') != QuizConfig.COMPOSITE:
        return question

    statements = question.get('compositeOptions')
    if not isinstance(statements, list):
        return question

    answer = question.get('answer')
    if isinstance(answer, list):
        question['type'] = QuizConfig.MULTI_CHOICE
    else:
        question['type'] = QuizConfig.SINGLE_CHOICE
    question['preamble'] = [str(statement) for statement in statements]
    del question['compositeOptions']
    return question
