# File: brainboost_app/modules/quiz/logics/stats_logic.py
# Score dashboard aggregation over the question collection.

from typing import Any, Dict, Iterable, List

from ..config import QuizConfig


def _rounded_mean(scores: List[int]) -> int:
    if not scores:
        return 0
    return int(sum(scores) / len(scores) + 0.5)


def score_bucket(score: int) -> str:
    for label, upper in QuizConfig.SCORE_BUCKETS:
        if score <= upper:
            return label
    return QuizConfig.SCORE_BUCKETS[-1][0]


def build_dashboard(questions: Iterable[Any]) -> Dict[str, Any]:
    """
    Aggregate attempt history for the score dashboard.

    Averages use each question's last result only; ``totalAttempts`` counts
    every attempt. With nothing attempted all figures are zero and the two
    chart series are empty.
    """
    questions = list(questions)
    attempted = [question for question in questions if question.last_result is not None]

    if not attempted:
        return {
            'totalAttempts': 0,
            'averageScore': 0,
            'questionsAttempted': 0,
            'questionsTotal': len(questions),
            'questionsMastered': 0,
            'performanceByDifficulty': [],
            'scoreDistribution': [],
        }

    last_scores = [question.last_result.score for question in attempted]

    performance = []
    for level in QuizConfig.DIFFICULTIES:
        level_scores = [q.last_result.score for q in attempted if q.difficulty == level]
        performance.append({'name': level, 'score': _rounded_mean(level_scores)})

    distribution = {label: 0 for label, _ in QuizConfig.SCORE_BUCKETS}
    for score in last_scores:
        distribution[score_bucket(score)] += 1

    return {
        'totalAttempts': sum(question.attempts for question in questions),
        'averageScore': _rounded_mean(last_scores),
        'questionsAttempted': len(attempted),
        'questionsTotal': len(questions),
        'questionsMastered': sum(1 for score in last_scores if score == QuizConfig.SCORE_CORRECT),
        'performanceByDifficulty': performance,
        'scoreDistribution': [
            {'name': label, 'count': count} for label, count in distribution.items()
        ],
    }
