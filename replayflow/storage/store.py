"""
StateStore abstract interface.

Defines contract for continuation storage implementations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class StateStore(ABC):
    """
    Abstract continuation storage interface.

    The store treats blobs as opaque text. All implementations must:
    - Either complete a save/load or raise StateStoreError
    - Treat save(subject, None) as delete (deleting a missing record is a no-op)
    """

    @abstractmethod
    def load(self, subject: str) -> Optional[str]:
        """
        Load the serialized continuation for a subject.

        Returns:
            Blob, or None if nothing is stored

        Raises:
            StateStoreError: If the read fails
        """
        ...

    @abstractmethod
    def save(self, subject: str, blob: Optional[str]) -> None:
        """
        Store (or, with blob=None, delete) the continuation for a subject.

        Raises:
            StateStoreError: If the write fails
        """
        ...

    @abstractmethod
    def subjects(self) -> List[str]:
        """List subjects with a stored continuation, sorted."""
        ...

    def delete(self, subject: str) -> None:
        self.save(subject, None)
