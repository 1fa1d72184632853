# File: brainboost_app/modules/quiz/routes/api.py
# JSON API over the quiz store: authoring, test taking, bulk editor, dashboard.

from flask import current_app, jsonify, request

from brainboost_app.core.error_handlers import NotFoundError, ValidationError, success_response

from .. import quiz_bp as blueprint
from ..config import QuizConfig
from ..forms import QuestionsJsonForm
from ..interface import get_quiz_store
from ..logics.authoring import parse_questions_payload
from ..logics.run_logic import RunAnswer, score_test_run
from ..logics.stats_logic import build_dashboard
from ..schemas import dump_question


def _respond(data=None, message=None, status=200):
    """Success envelope; adds a warning when the last storage write failed."""
    store = get_quiz_store()
    warning = None
    if store.last_error is not None:
        warning = 'Your changes are kept for this session but could not be saved to storage.'
    return jsonify(success_response(data, message, warning)), status


def _json_body(expected=dict):
    payload = request.get_json(silent=True)
    if not isinstance(payload, expected):
        raise ValidationError(
            'Invalid request body',
            errors={'body': f'Expected a JSON {"object" if expected is dict else "array or object"}.'},
        )
    return payload


def _require_question(question_id):
    question = get_quiz_store().get_by_id(question_id)
    if question is None:
        raise NotFoundError('Question not found', resource=question_id)
    return question


def _is_blank_answer(answer) -> bool:
    return answer is None or (isinstance(answer, (list, dict, str)) and len(answer) == 0)


@blueprint.route('/api/questions', methods=['GET'])
def list_questions_api():
    question_type = request.args.get('type') or None
    if question_type is not None and question_type not in QuizConfig.QUESTION_TYPES:
        raise ValidationError('Invalid filter', errors={'type': f"Unknown question type '{question_type}'"})

    questions = get_quiz_store().all(
        type_=question_type,
        difficulty=request.args.get('difficulty') or None,
        tag=request.args.get('tag') or None,
    )
    return _respond({
        'questions': [dump_question(question) for question in questions],
        'total': len(questions),
    })


@blueprint.route('/api/questions', methods=['POST'])
def create_questions_api():
    if request.is_json:
        questions = parse_questions_payload(request.get_json(silent=True))
    else:
        form = QuestionsJsonForm()
        if not form.validate_on_submit():
            raise ValidationError('Invalid question payload', errors=form.collected_errors())
        questions = form.parsed_questions

    ids = get_quiz_store().add_many(questions)
    current_app.logger.info("Created %d question(s) via API", len(ids))
    return _respond({'ids': ids}, message=f'{len(ids)} question(s) added', status=201)


@blueprint.route('/api/questions/<question_id>', methods=['GET'])
def get_question_api(question_id):
    return _respond({'question': dump_question(_require_question(question_id))})


@blueprint.route('/api/questions/<question_id>', methods=['PATCH', 'PUT'])
def update_question_api(question_id):
    fields = _json_body()
    updated = get_quiz_store().update(question_id, fields)
    if updated is None:
        raise NotFoundError('Question not found', resource=question_id)
    return _respond({'question': dump_question(updated)}, message='Question updated successfully')


@blueprint.route('/api/questions/<question_id>', methods=['DELETE'])
def delete_question_api(question_id):
    deleted = get_quiz_store().delete(question_id)
    return _respond({'deleted': deleted})


@blueprint.route('/api/questions/<question_id>/submit', methods=['POST'])
def submit_answer_api(question_id):
    body = _json_body()
    _require_question(question_id)

    answer = body.get('answer')
    if _is_blank_answer(answer):
        raise ValidationError(
            'No answer selected',
            errors={'answer': 'Please select an answer before submitting.'},
        )

    store = get_quiz_store()
    correct = store.submit_answer(question_id, answer, body.get('durationSeconds'))
    question = store.get_by_id(question_id)
    return _respond({
        'correct': correct,
        'explanation': question.explanation,
        'attempts': question.attempts,
        'lastResult': question.last_result.model_dump(by_alias=True, exclude_none=True),
    })


@blueprint.route('/api/questions/<question_id>/retake', methods=['POST'])
def retake_question_api(question_id):
    _require_question(question_id)
    cleared = get_quiz_store().retake(question_id)
    return _respond({'cleared': cleared})


@blueprint.route('/api/tests', methods=['POST'])
def submit_test_api():
    body = _json_body()
    entries = body.get('answers')
    if not isinstance(entries, list) or not entries:
        raise ValidationError('Invalid test submission', errors={'answers': 'Expected a non-empty list.'})

    answers = []
    errors = {}
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict) or not isinstance(entry.get('questionId'), str):
            errors[f'answers.{index}'] = 'Each answer needs a questionId.'
            continue
        if _is_blank_answer(entry.get('answer')):
            errors[f'answers.{index}.answer'] = 'Please select an answer before submitting.'
            continue
        answers.append(RunAnswer(entry['questionId'], entry['answer'], entry.get('durationSeconds')))
    if errors:
        raise ValidationError('Invalid test submission', errors=errors)

    result = score_test_run(get_quiz_store(), answers)
    return _respond(result.to_dict(), message='Test complete')


@blueprint.route('/api/editor', methods=['GET'])
def get_editor_api():
    return _respond(get_quiz_store().snapshot())


@blueprint.route('/api/editor', methods=['PUT'])
def replace_editor_api():
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        payload = payload.get('questions')
    if not isinstance(payload, list):
        raise ValidationError(
            'Invalid editor document',
            errors={'questions': 'Expected an array of questions.'},
        )

    count = get_quiz_store().replace_all(payload)
    return _respond({'count': count}, message='Collection saved')


@blueprint.route('/api/dashboard', methods=['GET'])
def dashboard_api():
    return _respond(build_dashboard(get_quiz_store().all()))
