"""Database models package for BrainBoost."""

from ..extensions import db

from .storage import StorageBlob

__all__ = [
    'db',
    'StorageBlob',
]
