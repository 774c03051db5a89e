"""
In-memory continuation store.
"""

from typing import Dict, List, Optional

from .store import StateStore


class InMemoryStateStore(StateStore):
    """
    Dict-backed store owned by whoever constructs it.

    Contents are lost with the process; use for tests and local runs.
    """

    def __init__(self) -> None:
        self._records: Dict[str, str] = {}

    def load(self, subject: str) -> Optional[str]:
        return self._records.get(subject)

    def save(self, subject: str, blob: Optional[str]) -> None:
        if blob is None:
            self._records.pop(subject, None)
        else:
            self._records[subject] = blob

    def subjects(self) -> List[str]:
        return sorted(self._records)

    def __len__(self) -> int:
        return len(self._records)
