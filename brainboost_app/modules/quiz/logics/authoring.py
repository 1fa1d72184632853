# File: brainboost_app/modules/quiz/logics/authoring.py
# Parsing and validation of authored questions (JSON editor and question form).

from __future__ import annotations

import json
import math
from typing import Any, Dict, List

from pydantic import ValidationError as PydanticValidationError

from brainboost_app.core.error_handlers import ValidationError

from ..schemas import QUESTION_ADAPTER


def validation_errors(exc: PydanticValidationError, prefix: str = '') -> Dict[str, str]:
    """Flatten a pydantic error into ``{"0.options": "message"}`` form."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        path = '.'.join(str(part) for part in (prefix, *error['loc']) if part != '')
        errors.setdefault(path or 'payload', error['msg'])
    return errors


def validate_duration(value: Any, field: str = 'durationSeconds') -> None:
    """Reject anything but None or a finite, non-negative number of seconds."""
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)) \
            or not math.isfinite(value) or value < 0:
        raise ValidationError(
            'Invalid duration',
            errors={field: 'Must be a non-negative number of seconds.'},
        )


def validate_question(record: Any, prefix: str = ''):
    """Validate one question record; raises ValidationError with field errors."""
    try:
        return QUESTION_ADAPTER.validate_python(record)
    except PydanticValidationError as exc:
        raise ValidationError('Invalid question', errors=validation_errors(exc, prefix)) from exc


def parse_questions_payload(payload: Any) -> List:
    """
    Parse an authoring payload into question models.

    ``payload`` is JSON text (or bytes) holding one question object or an
    array of them, or the already decoded object/list. Every question is
    validated before anything is returned, so a caller never commits part of
    a bad submission.
    """
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode('utf-8', errors='replace')

    if isinstance(payload, str):
        try:
            data = json.loads(payload)
        except ValueError as exc:
            raise ValidationError(
                'The questions JSON is not correctly formatted.',
                errors={'payload': f'Invalid JSON: {exc}'},
            ) from exc
    else:
        data = payload

    if isinstance(data, dict):
        items = [data]
    elif isinstance(data, list):
        items = data
    else:
        raise ValidationError(
            'Invalid question payload',
            errors={'payload': 'Expected a question object or an array of questions.'},
        )

    if not items:
        raise ValidationError(
            'Invalid question payload',
            errors={'payload': 'At least one question is required.'},
        )

    questions = []
    errors: Dict[str, str] = {}
    for index, item in enumerate(items):
        try:
            questions.append(validate_question(item, prefix=str(index)))
        except ValidationError as exc:
            errors.update(exc.errors)

    if errors:
        raise ValidationError('Invalid question payload', errors=errors)
    return questions
