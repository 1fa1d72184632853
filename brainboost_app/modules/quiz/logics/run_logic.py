# File: brainboost_app/modules/quiz/logics/run_logic.py
# Scoring of a test run: several questions answered in one sitting.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from brainboost_app.core.error_handlers import ValidationError

from .authoring import validate_duration


@dataclass
class AnswerOutcome:
    question_id: str
    correct: bool
    explanation: str


@dataclass
class QuizRunResult:
    score: int
    correct_count: int
    total: int
    results: List[AnswerOutcome] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'score': self.score,
            'correctCount': self.correct_count,
            'total': self.total,
            'results': [
                {'questionId': item.question_id, 'correct': item.correct, 'explanation': item.explanation}
                for item in self.results
            ],
            'missing': list(self.missing),
        }


@dataclass
class RunAnswer:
    question_id: str
    answer: Any
    duration_seconds: Optional[float] = None


def run_percentage(correct_count: int, total: int) -> int:
    """Rounded percentage of correct answers; 0 for an empty run."""
    if total <= 0:
        return 0
    # half-up rounding
    return int(correct_count * 100 / total + 0.5)


def score_test_run(store, answers: Sequence[RunAnswer]) -> QuizRunResult:
    """
    Record every answer of a test run through the store and score the run.

    Each answer becomes a normal attempt on its question. Answers for unknown
    question ids are listed in ``missing`` and left out of the score. Every
    duration is checked first, so a rejected run records nothing.
    """
    errors = {}
    for index, item in enumerate(answers):
        try:
            validate_duration(item.duration_seconds, field=f'answers.{index}.durationSeconds')
        except ValidationError as exc:
            errors.update(exc.errors)
    if errors:
        raise ValidationError('Invalid test submission', errors=errors)

    outcomes = []
    missing = []
    for item in answers:
        question = store.get_by_id(item.question_id)
        if question is None:
            missing.append(item.question_id)
            continue
        correct = store.submit_answer(item.question_id, item.answer, item.duration_seconds)
        outcomes.append(AnswerOutcome(item.question_id, correct, question.explanation))

    correct_count = sum(1 for outcome in outcomes if outcome.correct)
    return QuizRunResult(
        score=run_percentage(correct_count, len(outcomes)),
        correct_count=correct_count,
        total=len(outcomes),
        results=outcomes,
        missing=missing,
    )


__all__ = ['AnswerOutcome', 'QuizRunResult', 'RunAnswer', 'run_percentage', 'score_test_run']
