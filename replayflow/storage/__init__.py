"""
Continuation storage.

This module provides:
- StateStore: Abstract load/save interface keyed by subject
- InMemoryStateStore: Caller-owned dict-backed store
- FileStateStore: One JSON document per subject on disk
- S3StateStore: One S3 object per subject
- create_store: Build a store from EngineConfig
"""

from .store import StateStore
from .memory_store import InMemoryStateStore
from .file_store import FileStateStore
from .s3_store import S3StateStore
from .factory import create_store

__all__ = [
    "StateStore",
    "InMemoryStateStore",
    "FileStateStore",
    "S3StateStore",
    "create_store",
]
