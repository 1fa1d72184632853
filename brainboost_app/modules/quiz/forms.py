# File: brainboost_app/modules/quiz/forms.py
# Forms for authoring questions as JSON.

from flask_wtf import FlaskForm
from wtforms import SubmitField, TextAreaField
from wtforms.validators import DataRequired, ValidationError as FormValidationError

from brainboost_app.core.error_handlers import ValidationError

from .logics.authoring import parse_questions_payload


class QuestionsJsonForm(FlaskForm):
    """
    Form carrying one question object or an array of questions as JSON text.
    """
    questions = TextAreaField(
        'Questions (JSON)',
        validators=[DataRequired(message="At least one question is required.")],
    )
    submit = SubmitField('Save questions')

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.parsed_questions = []
        self.payload_errors = {}

    def validate_questions(self, field):
        try:
            self.parsed_questions = parse_questions_payload(field.data)
        except ValidationError as exc:
            self.payload_errors = exc.errors
            raise FormValidationError(exc.message)

    def collected_errors(self) -> dict:
        """Field errors of the form merged with per-question payload errors."""
        errors = {name: '; '.join(messages) for name, messages in self.errors.items()}
        errors.update(self.payload_errors)
        return errors
