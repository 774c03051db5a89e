"""
File-based continuation store.

Each subject is stored as one canonical JSON document:
  {directory}/{quoted subject}.json
"""

import os
import tempfile
from typing import List, Optional
from urllib.parse import quote, unquote

from ..core.errors import StateStoreError
from .store import StateStore

try:
    import fcntl
except ImportError:  # Windows or unsupported platform
    fcntl = None

SUFFIX = ".json"


class FileStateStore(StateStore):
    """
    Directory of per-subject JSON files.

    Guarantees:
    - Atomic replace (write temp file, fsync, rename)
    - Advisory exclusive lock around writes where fcntl is available
    - Subject names are percent-encoded, so any string is a valid subject
    """

    def __init__(self, directory: str) -> None:
        """
        Initialize file state store.

        Args:
            directory: Directory holding the documents (created if missing)
        """
        self.directory = directory
        self.lock_path = os.path.join(directory, ".lock")
        os.makedirs(directory, exist_ok=True)

    def path_for(self, subject: str) -> str:
        return os.path.join(self.directory, quote(subject, safe="") + SUFFIX)

    def load(self, subject: str) -> Optional[str]:
        path = self.path_for(subject)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return None
        except OSError as ex:
            raise StateStoreError(str(ex)) from ex

    def save(self, subject: str, blob: Optional[str]) -> None:
        path = self.path_for(subject)
        try:
            with open(self.lock_path, "a") as lock:
                if fcntl:
                    fcntl.flock(lock.fileno(), fcntl.LOCK_EX)
                try:
                    if blob is None:
                        self._remove(path)
                    else:
                        self._write(path, blob)
                finally:
                    if fcntl:
                        fcntl.flock(lock.fileno(), fcntl.LOCK_UN)
        except OSError as ex:
            raise StateStoreError(str(ex)) from ex

    def subjects(self) -> List[str]:
        try:
            names = os.listdir(self.directory)
        except OSError as ex:
            raise StateStoreError(str(ex)) from ex
        return sorted(unquote(n[: -len(SUFFIX)]) for n in names if n.endswith(SUFFIX))

    def _remove(self, path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass

    def _write(self, path: str, blob: str) -> None:
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=".tmp-", suffix=SUFFIX)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(blob)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
