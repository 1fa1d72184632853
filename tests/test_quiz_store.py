"""
Tests for the Quiz Store

Tests cover:
- Lifecycle (seeding, rehydration, dispose)
- CRUD and filtering
- Attempt recording and retake
- Bulk replace
- Failed writes
"""

import json
from datetime import datetime, timezone

import pytest

from brainboost_app.core.error_handlers import PersistenceError, StoreClosedError, ValidationError
from brainboost_app.core.signals import answer_submitted, collection_replaced, persistence_failed
from brainboost_app.modules.quiz.data import build_sample_questions
from brainboost_app.modules.quiz.schemas import dump_question
from brainboost_app.modules.quiz.services.persistence import MemoryAdapter
from brainboost_app.modules.quiz.services.quiz_store import QuizStore


FIXED_NOW = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


class FailingAdapter(MemoryAdapter):
    """Reads normally but refuses writes while ``fail`` is set."""

    fail = True

    def write_blob(self, key, data):
        if self.fail:
            raise PersistenceError('disk full', key=key)
        super().write_blob(key, data)


def _without_generated(record):
    record = dict(record)
    record.pop('id', None)
    record.pop('attempts', None)
    record.pop('preamble', None)
    return record


class TestLifecycle:
    def test_empty_storage_is_seeded_with_samples(self):
        adapter = MemoryAdapter()
        store = QuizStore(adapter, storage_key='k').init()

        questions = store.all()
        assert [q.question for q in questions] == [r['question'] for r in build_sample_questions()]
        assert len({q.id for q in questions}) == len(questions)
        # the seed is persisted straight away
        stored = json.loads(adapter.blobs['k'])
        assert stored['version'] == 2
        assert len(stored['questions']) == len(questions)

    def test_existing_collection_is_not_reseeded(self, multi_choice_question):
        document = {'version': 2, 'questions': [dict(multi_choice_question, id='q1')]}
        adapter = MemoryAdapter({'k': json.dumps(document)})
        store = QuizStore(adapter, storage_key='k').init()

        assert [q.id for q in store.all()] == ['q1']
        assert adapter.writes == 0

    def test_invalid_stored_records_are_skipped(self, multi_choice_question, caplog):
        broken = {'type': 'single-choice', 'question': 'Missing options', 'answer': 'a', 'explanation': 'x'}
        document = {'version': 2, 'questions': [broken, dict(multi_choice_question, id='q1')]}
        store = QuizStore(MemoryAdapter({'k': json.dumps(document)}), storage_key='k', seed=None).init()

        assert [q.id for q in store.all()] == ['q1']
        assert 'Skipping invalid stored question' in caplog.text

    def test_undecodable_blob_starts_empty(self):
        store = QuizStore(MemoryAdapter({'k': '{not json'}), storage_key='k', seed=None).init()
        assert len(store) == 0

    def test_use_before_init_raises(self):
        store = QuizStore(MemoryAdapter(), seed=None)
        with pytest.raises(StoreClosedError):
            store.all()

    def test_dispose_flushes_and_closes(self, adapter):
        store = QuizStore(adapter, storage_key='k', seed=None).init()
        writes = adapter.writes
        store.dispose()
        assert adapter.writes == writes + 1
        assert store.is_ready is False
        with pytest.raises(StoreClosedError):
            store.get_by_id('anything')
        # a second dispose is a no-op
        store.dispose()
        assert adapter.writes == writes + 1

    def test_init_twice_does_nothing(self, store, adapter):
        writes = adapter.writes
        store.init()
        assert adapter.writes == writes


class TestCrud:
    def test_add_then_get_returns_equal_record(self, store, multi_choice_question):
        question_id = store.add(dict(multi_choice_question, id='ignored'))
        assert question_id != 'ignored'

        stored = dump_question(store.get_by_id(question_id))
        assert stored.pop('id') == question_id
        assert stored.pop('attempts') == 0
        assert stored.pop('preamble') == []
        assert stored == multi_choice_question

    def test_add_persists(self, store, adapter, multi_choice_question):
        question_id = store.add(multi_choice_question)
        stored = json.loads(adapter.blobs['test-key'])
        assert [q['id'] for q in stored['questions']] == [question_id]

    def test_add_rejects_invalid_record(self, store):
        with pytest.raises(ValidationError) as excinfo:
            store.add({'type': 'multi-choice', 'question': 'Q', 'options': [], 'answer': ['a'], 'explanation': 'e'})
        assert any(path.startswith('0.multi-choice.options') for path in excinfo.value.errors)
        assert len(store) == 0

    def test_add_many_is_all_or_nothing(self, store, adapter, multi_choice_question):
        writes = adapter.writes
        bad = dict(multi_choice_question, answer=['z'])
        with pytest.raises(ValidationError) as excinfo:
            store.add_many([multi_choice_question, bad])
        assert all(path.startswith('1.') for path in excinfo.value.errors)
        assert len(store) == 0
        assert adapter.writes == writes

    def test_add_trims_surrounding_whitespace(self, store, multi_choice_question):
        record = dict(
            multi_choice_question,
            question='  Which of these are primary colours?  ',
            options=[{'key': ' a', 'text': 'Red '}, {'key': 'c', 'text': ' Blue'}],
            answer=['a ', 'c'],
            tags=[' colours '],
        )
        stored = store.get_by_id(store.add(record))

        assert stored.question == 'Which of these are primary colours?'
        assert [(o.key, o.text) for o in stored.options] == [('a', 'Red'), ('c', 'Blue')]
        assert stored.answer == ['a', 'c']
        assert stored.tags == ['colours']

    def test_get_by_id_returns_a_copy(self, store, multi_choice_question):
        question_id = store.add(multi_choice_question)
        copy = store.get_by_id(question_id)
        copy.answer.append('b')
        assert store.get_by_id(question_id).answer == ['a', 'c']

    def test_get_by_unknown_id(self, store):
        assert store.get_by_id('missing') is None

    def test_all_keeps_insertion_order_and_filters(self, store, multi_choice_question, composite_question):
        first = store.add(multi_choice_question)
        second = store.add(composite_question)

        assert [q.id for q in store.all()] == [first, second]
        assert [q.id for q in store.all(type_='composite')] == [second]
        assert [q.id for q in store.all(difficulty='easy')] == [first]
        assert [q.id for q in store.all(tag='colours')] == [first]

    def test_update_merges_fields(self, store, multi_choice_question):
        question_id = store.add(multi_choice_question)
        updated = store.update(question_id, {'id': 'new-id', 'explanation': 'Updated.', 'difficulty': 'hard'})

        assert updated.id == question_id
        assert updated.explanation == 'Updated.'
        assert updated.difficulty == 'hard'
        assert updated.answer == ['a', 'c']

    def test_update_accepts_snake_case_fields(self, store, composite_question):
        question_id = store.add(composite_question)
        options = dict(composite_question['compositeOptions'])
        options['choices'] = options['choices'] + [{'key': 'z', 'text': 'Reptile'}]
        updated = store.update(question_id, {'composite_options': options})
        assert [choice.key for choice in updated.composite_options.choices] == ['x', 'y', 'z']

    def test_update_none_removes_optional_field(self, store, multi_choice_question):
        question_id = store.add(multi_choice_question)
        assert store.update(question_id, {'difficulty': None}).difficulty is None

    def test_invalid_update_leaves_record_unchanged(self, store, multi_choice_question):
        question_id = store.add(multi_choice_question)
        with pytest.raises(ValidationError):
            store.update(question_id, {'answer': ['z']})
        assert store.get_by_id(question_id).answer == ['a', 'c']

    def test_update_unknown_id(self, store):
        assert store.update('missing', {'explanation': 'x'}) is None

    def test_delete_is_idempotent(self, store, multi_choice_question):
        question_id = store.add(multi_choice_question)
        assert store.delete(question_id) is True
        assert store.delete(question_id) is False
        assert store.get_by_id(question_id) is None


class TestAttempts:
    def test_submit_records_result(self, adapter, multi_choice_question):
        store = QuizStore(adapter, seed=None, clock=lambda: FIXED_NOW).init()
        question_id = store.add(multi_choice_question)

        assert store.submit_answer(question_id, ['c', 'a'], duration_seconds=12.5) is True
        question = store.get_by_id(question_id)
        assert question.attempts == 1
        assert question.last_result.score == 100
        assert question.last_result.timestamp == '2024-05-01T12:30:00+00:00'
        assert question.last_result.duration_seconds == 12.5

        assert store.submit_answer(question_id, ['a']) is False
        question = store.get_by_id(question_id)
        assert question.attempts == 2
        assert question.last_result.score == 0
        assert question.last_result.duration_seconds is None

    def test_submit_unknown_id_changes_nothing(self, store, adapter, multi_choice_question):
        store.add(multi_choice_question)
        before = store.snapshot()
        writes = adapter.writes

        assert store.submit_answer('missing', ['a', 'c']) is False
        assert store.snapshot() == before
        assert adapter.writes == writes

    def test_submit_rejects_negative_duration(self, store, multi_choice_question):
        question_id = store.add(multi_choice_question)
        with pytest.raises(ValidationError):
            store.submit_answer(question_id, ['a', 'c'], duration_seconds=-1)
        assert store.get_by_id(question_id).attempts == 0

    @pytest.mark.parametrize('duration', [float('nan'), float('inf'), 'soon', True])
    def test_submit_rejects_unusable_duration(self, store, multi_choice_question, duration):
        question_id = store.add(multi_choice_question)
        with pytest.raises(ValidationError) as excinfo:
            store.submit_answer(question_id, ['a', 'c'], duration_seconds=duration)
        assert 'durationSeconds' in excinfo.value.errors
        assert store.get_by_id(question_id).last_result is None

    def test_submit_sends_signal(self, store, multi_choice_question):
        question_id = store.add(multi_choice_question)
        received = []

        def listener(sender, **kwargs):
            received.append(kwargs)

        with answer_submitted.connected_to(listener, sender=store):
            store.submit_answer(question_id, ['a', 'c'])

        assert received == [{
            'question_id': question_id,
            'correct': True,
            'score': 100,
            'attempts': 1,
            'duration_seconds': None,
        }]

    def test_retake_clears_result_and_keeps_attempts(self, store, multi_choice_question):
        question_id = store.add(multi_choice_question)
        store.submit_answer(question_id, ['a'])

        assert store.retake(question_id) is True
        question = store.get_by_id(question_id)
        assert question.last_result is None
        assert question.attempts == 1

        assert store.retake(question_id) is False
        assert store.retake('missing') is False


class TestReplaceAll:
    def test_replaces_collection_and_assigns_ids(self, store, multi_choice_question, composite_question):
        store.add(multi_choice_question)
        received = []

        def listener(sender, **kwargs):
            received.append(kwargs['count'])

        with collection_replaced.connected_to(listener, sender=store):
            count = store.replace_all([dict(composite_question, id='keep-me'), multi_choice_question])

        assert count == 2
        assert received == [2]
        questions = store.all()
        assert questions[0].id == 'keep-me'
        assert questions[1].id and questions[1].id != 'keep-me'

    def test_duplicate_ids_are_rejected(self, store, multi_choice_question):
        original = store.add(multi_choice_question)
        records = [dict(multi_choice_question, id='dup'), dict(multi_choice_question, id='dup')]
        with pytest.raises(ValidationError) as excinfo:
            store.replace_all(records)
        assert '1.id' in excinfo.value.errors
        assert [q.id for q in store.all()] == [original]

    def test_invalid_record_keeps_prior_state(self, store, multi_choice_question):
        original = store.add(multi_choice_question)
        with pytest.raises(ValidationError):
            store.replace_all([{'type': 'true-false', 'question': 'Q', 'answer': 'yes', 'explanation': 'e'}])
        assert [q.id for q in store.all()] == [original]


class TestFailedWrites:
    def test_failed_write_is_not_fatal(self, multi_choice_question, caplog):
        store = QuizStore(FailingAdapter(), storage_key='k', seed=None).init()
        failures = []

        def listener(sender, **kwargs):
            failures.append(kwargs)

        with persistence_failed.connected_to(listener, sender=store):
            question_id = store.add(multi_choice_question)

        assert store.get_by_id(question_id) is not None
        assert isinstance(store.last_error, PersistenceError)
        assert failures[0]['key'] == 'k'
        assert failures[0]['error'] is store.last_error
        assert 'Could not persist quiz store' in caplog.text

    def test_successful_write_clears_last_error(self, multi_choice_question):
        adapter = FailingAdapter()
        store = QuizStore(adapter, storage_key='k', seed=None).init()
        store.add(multi_choice_question)
        assert store.last_error is not None

        adapter.fail = False
        store.add(multi_choice_question)
        assert store.last_error is None
        assert len(json.loads(adapter.blobs['k'])['questions']) == 2


def test_end_to_end_scenario(multi_choice_question):
    adapter = MemoryAdapter()
    store = QuizStore(adapter).init()

    seeded = [_without_generated(dump_question(q)) for q in store.all()]
    assert seeded == [_without_generated(record) for record in build_sample_questions()]

    question_id = store.add(dict(multi_choice_question))
    assert store.submit_answer(question_id, ['c', 'a']) is True

    question = store.get_by_id(question_id)
    assert question.attempts == 1
    assert question.last_result.score == 100

    # a fresh store over the same storage sees the attempt
    store.dispose()
    reloaded = QuizStore(adapter).init()
    assert reloaded.get_by_id(question_id).last_result.score == 100
    assert len(reloaded) == len(build_sample_questions()) + 1
