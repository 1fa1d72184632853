"""Pydantic models for quiz questions.

Questions are a tagged union keyed by ``type``: each variant fixes the shape
of its ``answer`` so nothing downstream has to sniff it at runtime. Field
names are snake_case in Python and camelCase on the wire (``lastResult``,
``compositeOptions``, ``durationSeconds``).
"""

from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    TypeAdapter,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .config import QuizConfig


class QuizModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra='ignore',
    )


class Option(QuizModel):
    key: StrictStr = Field(min_length=1)
    text: StrictStr = Field(min_length=1)


class CompositeStatement(QuizModel):
    id: StrictStr = Field(min_length=1)
    text: StrictStr = Field(min_length=1)


class CompositeChoice(QuizModel):
    key: StrictStr = Field(min_length=1)
    text: StrictStr = Field(min_length=1)


class CompositeOptions(QuizModel):
    statements: List[CompositeStatement] = Field(min_length=1)
    choices: List[CompositeChoice] = Field(min_length=1)

    @field_validator('statements')
    @classmethod
    def _unique_statement_ids(cls, statements):
        ids = [statement.id for statement in statements]
        if len(ids) != len(set(ids)):
            raise ValueError('statement ids must be unique')
        return statements

    @field_validator('choices')
    @classmethod
    def _unique_choice_keys(cls, choices):
        keys = [choice.key for choice in choices]
        if len(keys) != len(set(keys)):
            raise ValueError('choice keys must be unique')
        return choices


class LastResult(QuizModel):
    score: int = Field(ge=0, le=100)
    timestamp: str
    duration_seconds: Optional[float] = Field(default=None, ge=0)


class BaseQuestion(QuizModel):
    id: Optional[StrictStr] = None
    question: StrictStr = Field(min_length=1)
    explanation: StrictStr = Field(min_length=1)
    difficulty: Optional[Literal['easy', 'medium', 'hard']] = None
    tags: List[StrictStr] = Field(default_factory=list)
    last_result: Optional[LastResult] = None
    attempts: int = Field(default=0, ge=0)

    @field_validator('tags', mode='before')
    @classmethod
    def _split_tag_string(cls, value):
        # The authoring form sends tags as "geo, capitals"
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(',') if tag.strip()]
        if value is None:
            return []
        return value

    @field_validator('difficulty', mode='before')
    @classmethod
    def _blank_difficulty(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ChoiceQuestion(BaseQuestion):
    options: List[Option] = Field(min_length=QuizConfig.MIN_OPTIONS)
    # Display-only statements shown above the options
    preamble: List[StrictStr] = Field(default_factory=list)

    @field_validator('options')
    @classmethod
    def _unique_option_keys(cls, options):
        keys = [option.key for option in options]
        if len(keys) != len(set(keys)):
            raise ValueError('option keys must be unique')
        return options

    def option_keys(self) -> List[str]:
        return [option.key for option in self.options]


class SingleChoiceQuestion(ChoiceQuestion):
    type: Literal['single-choice']
    answer: StrictStr

    @model_validator(mode='after')
    def _answer_is_an_option(self):
        if self.answer not in self.option_keys():
            raise ValueError(f"answer '{self.answer}' is not one of the option keys")
        return self


class MultiChoiceQuestion(ChoiceQuestion):
    type: Literal['multi-choice']
    answer: List[StrictStr] = Field(min_length=1)

    @model_validator(mode='after')
    def _answer_is_subset_of_options(self):
        if len(self.answer) != len(set(self.answer)):
            raise ValueError('answer keys must be unique')
        unknown = [key for key in self.answer if key not in self.option_keys()]
        if unknown:
            raise ValueError(f"answer keys {unknown} are not option keys")
        return self


class TrueFalseQuestion(BaseQuestion):
    type: Literal['true-false']
    answer: StrictBool


class CompositeQuestion(BaseQuestion):
    type: Literal['composite']
    composite_options: CompositeOptions
    answer: Dict[StrictStr, StrictStr]

    @model_validator(mode='after')
    def _answer_matches_statements(self):
        statement_ids = {statement.id for statement in self.composite_options.statements}
        if set(self.answer) != statement_ids:
            raise ValueError('answer must map every statement id to a choice key')
        choice_keys = {choice.key for choice in self.composite_options.choices}
        unknown = sorted(value for value in self.answer.values() if value not in choice_keys)
        if unknown:
            raise ValueError(f"answer values {unknown} are not choice keys")
        return self


Question = Annotated[
    Union[SingleChoiceQuestion, MultiChoiceQuestion, TrueFalseQuestion, CompositeQuestion],
    Field(discriminator='type'),
]

QUESTION_ADAPTER = TypeAdapter(Question)


def dump_question(question) -> dict:
    """Serialize a question the way it is persisted and returned by the API."""
    return question.model_dump(by_alias=True, exclude_none=True, mode='json')
