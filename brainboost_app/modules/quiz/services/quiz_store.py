"""
Quiz Store

Ordered, in-memory collection of questions backed by a persistence adapter.
The store is an explicit object with an ``init()`` / ``dispose()`` lifecycle:
``init()`` rehydrates (migrating legacy data and seeding an empty collection
with the sample set), every mutation writes the whole collection back under
one storage key, and ``dispose()`` flushes and closes it.

Lookups by an unknown id are not errors: they return ``None`` (or ``False``
for the mutating calls) and leave the collection untouched. Failed writes are
logged, published on ``persistence_failed`` and kept in ``last_error``; the
in-memory state keeps the change.
"""

from __future__ import annotations

import json
import threading
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from brainboost_app.core.error_handlers import PersistenceError, StoreClosedError, ValidationError
from brainboost_app.core.logging_config import get_logger
from brainboost_app.core.signals import answer_submitted, collection_replaced, persistence_failed

from ..config import QuizConfig
from ..data import build_sample_questions
from ..logics.authoring import validate_duration, validate_question
from ..logics.evaluator import is_correct
from ..logics.migration import load_document
from ..schemas import LastResult, dump_question
from .persistence import PersistenceAdapter

logger = get_logger('quiz.store')


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _wire_name(field: str) -> str:
    # accept snake_case field names from Python callers
    return to_camel(field) if '_' in field else field


def _as_dict(record: Any, prefix: str = '') -> dict:
    if isinstance(record, BaseModel):
        return dump_question(record)
    if isinstance(record, Mapping):
        return dict(record)
    raise ValidationError(
        'Invalid question',
        errors={prefix or 'payload': 'Expected a question object.'},
    )


class QuizStore:
    """Question collection with CRUD and attempt recording."""

    def __init__(
        self,
        adapter: PersistenceAdapter,
        storage_key: str = QuizConfig.STORAGE_KEY,
        seed: Optional[Callable[[], List[dict]]] = build_sample_questions,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._adapter = adapter
        self.storage_key = storage_key
        self._seed = seed
        self._clock = clock
        self._questions = []
        self._lock = threading.RLock()
        self._ready = False
        self.last_error: Optional[PersistenceError] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return self._ready

    def init(self) -> 'QuizStore':
        """Rehydrate from storage. Calling it again on a ready store does nothing."""
        with self._lock:
            if self._ready:
                return self

            document, migrated = load_document(self._adapter.read_blob(self.storage_key))
            self._questions = self._load_records(document['questions'])
            self._ready = True

            if not self._questions and self._seed is not None:
                self._questions = self._load_records(self._seed())
                logger.info("Seeded empty quiz store with %d sample questions", len(self._questions))
                self._persist()
            elif migrated:
                self._persist()

            logger.info("Quiz store ready: %d questions under key %r", len(self._questions), self.storage_key)
        return self

    def dispose(self) -> None:
        """Write the collection one last time and close the store."""
        with self._lock:
            if not self._ready:
                return
            self._persist()
            self._ready = False
            self._questions = []
            logger.info("Quiz store under key %r disposed", self.storage_key)

    def _require_ready(self) -> None:
        if not self._ready:
            raise StoreClosedError()

    def _load_records(self, records: Iterable[Any]) -> list:
        questions = []
        seen = set()
        for index, record in enumerate(records):
            try:
                question = validate_question(_as_dict(record, str(index)), prefix=str(index))
            except ValidationError as exc:
                logger.warning("Skipping invalid stored question #%d: %s", index, exc.errors)
                continue
            if not question.id or question.id in seen:
                question.id = self._new_id(reserved=seen)
            seen.add(question.id)
            questions.append(question)
        return questions

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._questions)

    def all(self, type_: Optional[str] = None, difficulty: Optional[str] = None,
            tag: Optional[str] = None) -> list:
        """Questions in display order, optionally filtered."""
        with self._lock:
            self._require_ready()
            return [
                question.model_copy(deep=True)
                for question in self._questions
                if (type_ is None or question.type == type_)
                and (difficulty is None or question.difficulty == difficulty)
                and (tag is None or tag in question.tags)
            ]

    def get_by_id(self, question_id: str):
        with self._lock:
            self._require_ready()
            index = self._find_index(question_id)
            if index is None:
                return None
            return self._questions[index].model_copy(deep=True)

    def snapshot(self) -> dict:
        """The document persisted under the storage key."""
        with self._lock:
            return {
                'version': QuizConfig.SCHEMA_VERSION,
                'questions': [dump_question(question) for question in self._questions],
            }

    def _find_index(self, question_id: str) -> Optional[int]:
        for index, question in enumerate(self._questions):
            if question.id == question_id:
                return index
        return None

    def _new_id(self, reserved: Iterable[str] = ()) -> str:
        taken = {question.id for question in self._questions}
        taken.update(reserved)
        while True:
            candidate = uuid.uuid4().hex
            if candidate not in taken:
                return candidate

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, record) -> str:
        """Append a question under a fresh id and return that id.

        Text fields (question, explanation, option keys and texts, answers,
        tags) are stored with surrounding whitespace trimmed.
        """
        return self.add_many([record])[0]

    def add_many(self, records: Iterable[Any]) -> List[str]:
        """Append several questions; nothing is added unless all are valid."""
        with self._lock:
            self._require_ready()
            prepared = []
            errors = {}
            reserved = set()
            for index, record in enumerate(records):
                try:
                    data = _as_dict(record, str(index))
                    data['id'] = self._new_id(reserved=reserved)
                    question = validate_question(data, prefix=str(index))
                except ValidationError as exc:
                    errors.update(exc.errors)
                    continue
                reserved.add(question.id)
                prepared.append(question)
            if errors:
                raise ValidationError('Invalid question payload', errors=errors)

            self._questions.extend(prepared)
            self._persist()
            logger.info("Added %d question(s)", len(prepared))
            return [question.id for question in prepared]

    def update(self, question_id: str, fields: Mapping):
        """Merge ``fields`` into a question; returns the updated copy or None."""
        with self._lock:
            self._require_ready()
            index = self._find_index(question_id)
            if index is None:
                return None

            current = self._questions[index]
            merged = dump_question(current)
            for field, value in dict(fields).items():
                name = _wire_name(field)
                if name == 'id':
                    continue
                if value is None:
                    merged.pop(name, None)
                else:
                    merged[name] = value

            updated = validate_question(merged)
            updated.id = current.id
            self._questions[index] = updated
            self._persist()
            return updated.model_copy(deep=True)

    def delete(self, question_id: str) -> bool:
        """Remove a question; returns False when there was nothing to remove."""
        with self._lock:
            self._require_ready()
            index = self._find_index(question_id)
            if index is None:
                return False
            del self._questions[index]
            self._persist()
            return True

    def submit_answer(self, question_id: str, submitted_answer: Any,
                      duration_seconds: Optional[float] = None) -> bool:
        """
        Evaluate and record one attempt.

        Writes ``last_result`` (score 100 or 0, UTC timestamp, duration) and
        increments ``attempts``. Returns the correctness, or False without any
        change when the question does not exist.
        """
        validate_duration(duration_seconds)

        with self._lock:
            self._require_ready()
            index = self._find_index(question_id)
            if index is None:
                logger.info("Answer submitted for unknown question %s", question_id)
                return False

            question = self._questions[index]
            correct = is_correct(question, submitted_answer)
            score = QuizConfig.SCORE_CORRECT if correct else QuizConfig.SCORE_INCORRECT
            question.last_result = LastResult(
                score=score,
                timestamp=self._clock().isoformat(),
                duration_seconds=duration_seconds,
            )
            question.attempts += 1
            self._persist()

        answer_submitted.send(
            self,
            question_id=question_id,
            correct=correct,
            score=score,
            attempts=question.attempts,
            duration_seconds=duration_seconds,
        )
        return correct

    def retake(self, question_id: str) -> bool:
        """Clear the last result (attempts are kept); False if nothing to clear."""
        with self._lock:
            self._require_ready()
            index = self._find_index(question_id)
            if index is None or self._questions[index].last_result is None:
                return False
            self._questions[index].last_result = None
            self._persist()
            return True

    def replace_all(self, records: Iterable[Any]) -> int:
        """Overwrite the whole collection (bulk editor); returns the new size."""
        with self._lock:
            self._require_ready()
            validated = []
            errors = {}
            seen = set()
            for index, record in enumerate(records):
                try:
                    question = validate_question(_as_dict(record, str(index)), prefix=str(index))
                except ValidationError as exc:
                    errors.update(exc.errors)
                    continue
                if question.id is not None:
                    if question.id in seen:
                        errors[f'{index}.id'] = f"Duplicate id '{question.id}'"
                        continue
                    seen.add(question.id)
                validated.append(question)
            if errors:
                raise ValidationError('Invalid question collection', errors=errors)

            for question in validated:
                if question.id is None:
                    question.id = self._new_id(reserved=seen)
                    seen.add(question.id)

            self._questions = validated
            self._persist()

        collection_replaced.send(self, count=len(validated))
        return len(validated)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _persist(self) -> None:
        payload = json.dumps(self.snapshot(), ensure_ascii=False)
        try:
            self._adapter.write_blob(self.storage_key, payload)
        except PersistenceError as exc:
            self.last_error = exc
            logger.error("Could not persist quiz store under %r: %s", self.storage_key, exc.message)
            persistence_failed.send(self, key=self.storage_key, error=exc)
        else:
            self.last_error = None
