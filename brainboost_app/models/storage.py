"""Key-value table holding named storage blobs."""

from __future__ import annotations

from sqlalchemy.sql import func

from brainboost_app.extensions import db


class StorageBlob(db.Model):
    """One serialized document per storage key.

    The quiz store keeps its whole collection in a single row, the same way a
    browser keeps an app's state under one local-storage key.
    """

    __tablename__ = 'storage_blobs'

    key = db.Column(db.String(100), primary_key=True)
    value = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<StorageBlob {self.key} ({len(self.value or '')} bytes)>"
