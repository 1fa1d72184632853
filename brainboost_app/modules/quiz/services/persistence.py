"""
Persistence adapters for the quiz store.

The store only needs two operations: read the blob stored under a key and
write a new blob under that key. Keeping that behind an adapter lets the same
store run against the database, a JSON file on disk, or plain memory in tests.
Adapters report failures as ``PersistenceError``.
"""

from __future__ import annotations

import os
import re
import tempfile
from abc import ABC, abstractmethod
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

from brainboost_app.core.error_handlers import PersistenceError
from brainboost_app.core.logging_config import get_logger

logger = get_logger('quiz.persistence')


class PersistenceAdapter(ABC):
    """Read/write access to named storage blobs."""

    @abstractmethod
    def read_blob(self, key: str) -> Optional[str]:
        """Return the blob stored under ``key``, or None when there is none."""

    @abstractmethod
    def write_blob(self, key: str, data: str) -> None:
        """Store ``data`` under ``key``, replacing any previous blob."""


class MemoryAdapter(PersistenceAdapter):
    """Keeps blobs in a dict; used by tests and the 'memory' backend."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.blobs: Dict[str, str] = dict(initial or {})
        self.writes = 0

    def read_blob(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    def write_blob(self, key: str, data: str) -> None:
        self.blobs[key] = data
        self.writes += 1


class JsonFileAdapter(PersistenceAdapter):
    """One ``<key>.json`` file per key inside ``directory``."""

    _UNSAFE_CHARS = re.compile(r'[^A-Za-z0-9._-]')

    def __init__(self, directory: str):
        self.directory = directory

    def path_for(self, key: str) -> str:
        filename = self._UNSAFE_CHARS.sub('_', key) or 'storage'
        return os.path.join(self.directory, f'{filename}.json')

    def read_blob(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, 'r', encoding='utf-8') as handle:
                return handle.read()
        except OSError as exc:
            raise PersistenceError(f'Could not read {path}: {exc}', key=key) from exc

    def write_blob(self, key: str, data: str) -> None:
        path = self.path_for(key)
        try:
            os.makedirs(self.directory, exist_ok=True)
            # write to a sibling temp file, then swap it in
            fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix='.tmp-', suffix='.json')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as handle:
                    handle.write(data)
                os.replace(tmp_path, path)
            except OSError:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as exc:
            raise PersistenceError(f'Could not write {path}: {exc}', key=key) from exc


class DatabaseAdapter(PersistenceAdapter):
    """Stores blobs as rows of the ``storage_blobs`` table.

    Each call runs in its own application context, so the adapter works both
    inside a request and from startup or shutdown code.
    """

    def __init__(self, app):
        self.app = app

    def read_blob(self, key: str) -> Optional[str]:
        from brainboost_app.models import StorageBlob, db

        with self.app.app_context():
            try:
                blob = db.session.get(StorageBlob, key)
                return blob.value if blob is not None else None
            except SQLAlchemyError as exc:
                db.session.rollback()
                raise PersistenceError(f'Could not read storage blob: {exc}', key=key) from exc

    def write_blob(self, key: str, data: str) -> None:
        from brainboost_app.models import StorageBlob, db

        with self.app.app_context():
            try:
                blob = db.session.get(StorageBlob, key)
                if blob is None:
                    db.session.add(StorageBlob(key=key, value=data))
                else:
                    blob.value = data
                db.session.commit()
            except SQLAlchemyError as exc:
                db.session.rollback()
                raise PersistenceError(f'Could not write storage blob: {exc}', key=key) from exc


def build_adapter(app) -> PersistenceAdapter:
    """Pick the adapter named by ``QUIZ_STORAGE_BACKEND``."""
    backend = (app.config.get('QUIZ_STORAGE_BACKEND') or 'database').lower()
    logger.info("Quiz storage backend: %s", backend)
    if backend == 'database':
        return DatabaseAdapter(app)
    if backend == 'file':
        return JsonFileAdapter(app.config['QUIZ_STORAGE_DIR'])
    if backend == 'memory':
        return MemoryAdapter()
    raise ValueError(f"Unknown QUIZ_STORAGE_BACKEND '{backend}' (expected database, file or memory)")
