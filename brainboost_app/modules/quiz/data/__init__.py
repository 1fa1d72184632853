"""Static data shipped with the quiz module."""

from .sample_questions import SAMPLE_QUESTIONS, build_sample_questions

__all__ = ["SAMPLE_QUESTIONS", "build_sample_questions"]
