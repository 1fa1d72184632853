"""
Tests for the storage adapters and backend selection.
"""

import json
import os

import pytest

from brainboost_app.core.error_handlers import PersistenceError
from brainboost_app.models import StorageBlob, db
from brainboost_app.modules.quiz.services.persistence import (
    DatabaseAdapter,
    JsonFileAdapter,
    MemoryAdapter,
    build_adapter,
)
from brainboost_app.modules.quiz.services.quiz_store import QuizStore


class TestJsonFileAdapter:
    def test_missing_file_reads_as_none(self, tmp_path):
        assert JsonFileAdapter(str(tmp_path)).read_blob('brainboost-quiz-storage') is None

    def test_write_then_read(self, tmp_path):
        adapter = JsonFileAdapter(str(tmp_path / 'storage'))
        adapter.write_blob('brainboost-quiz-storage', '{"version": 2, "questions": []}')

        assert (tmp_path / 'storage' / 'brainboost-quiz-storage.json').exists()
        assert adapter.read_blob('brainboost-quiz-storage') == '{"version": 2, "questions": []}'

    def test_write_replaces_and_leaves_no_temp_files(self, tmp_path):
        adapter = JsonFileAdapter(str(tmp_path))
        adapter.write_blob('key', 'first')
        adapter.write_blob('key', 'second')

        assert adapter.read_blob('key') == 'second'
        assert sorted(os.listdir(tmp_path)) == ['key.json']

    def test_key_is_sanitised_into_a_filename(self, tmp_path):
        adapter = JsonFileAdapter(str(tmp_path))
        assert adapter.path_for('../etc/passwd') == os.path.join(str(tmp_path), '.._etc_passwd.json')

    def test_unwritable_directory_raises_persistence_error(self, tmp_path):
        blocker = tmp_path / 'not-a-dir'
        blocker.write_text('file in the way')
        adapter = JsonFileAdapter(str(blocker))

        with pytest.raises(PersistenceError) as excinfo:
            adapter.write_blob('key', 'data')
        assert excinfo.value.key == 'key'

    def test_store_round_trip_through_files(self, tmp_path, multi_choice_question):
        store = QuizStore(JsonFileAdapter(str(tmp_path)), storage_key='quiz', seed=None).init()
        question_id = store.add(multi_choice_question)
        store.dispose()

        stored = json.loads((tmp_path / 'quiz.json').read_text(encoding='utf-8'))
        assert [q['id'] for q in stored['questions']] == [question_id]

        reloaded = QuizStore(JsonFileAdapter(str(tmp_path)), storage_key='quiz', seed=None).init()
        assert reloaded.get_by_id(question_id).answer == ['a', 'c']


class TestDatabaseAdapter:
    def test_write_then_read(self, app):
        adapter = DatabaseAdapter(app)
        assert adapter.read_blob('other-key') is None

        adapter.write_blob('other-key', 'one')
        adapter.write_blob('other-key', 'two')

        assert adapter.read_blob('other-key') == 'two'
        assert StorageBlob.query.filter_by(key='other-key').count() == 1

    def test_store_persists_into_storage_blobs(self, app, multi_choice_question):
        store = QuizStore(DatabaseAdapter(app), storage_key='db-store', seed=None).init()
        question_id = store.add(multi_choice_question)

        blob = db.session.get(StorageBlob, 'db-store')
        assert json.loads(blob.value)['questions'][0]['id'] == question_id


class TestBuildAdapter:
    def test_backend_names(self, app, tmp_path):
        app.config['QUIZ_STORAGE_BACKEND'] = 'database'
        assert isinstance(build_adapter(app), DatabaseAdapter)

        app.config['QUIZ_STORAGE_BACKEND'] = 'FILE'
        app.config['QUIZ_STORAGE_DIR'] = str(tmp_path)
        adapter = build_adapter(app)
        assert isinstance(adapter, JsonFileAdapter)
        assert adapter.directory == str(tmp_path)

        app.config['QUIZ_STORAGE_BACKEND'] = 'memory'
        assert isinstance(build_adapter(app), MemoryAdapter)

    def test_unknown_backend(self, app):
        app.config['QUIZ_STORAGE_BACKEND'] = 'redis'
        with pytest.raises(ValueError):
            build_adapter(app)
