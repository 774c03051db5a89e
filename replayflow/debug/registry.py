"""
DebugRegistry: latest continuation per root id, for inspection.
"""

from typing import Dict, List, Optional

from ..core.state import FlowState


class DebugRegistry:
    """
    Caller-owned record of the states produced while debugging.

    Completed trees are kept too (they are deleted from the store), which
    is what makes finished or failed conversations inspectable.
    """

    def __init__(self, limit: int = 100) -> None:
        self.limit = limit
        self._states: Dict[str, FlowState] = {}

    def record(self, state: FlowState) -> None:
        # snapshot: the live tree belongs to the next run
        self._states[state.id] = FlowState.from_dict(state.to_dict())
        for stale in self.ids()[self.limit:]:
            del self._states[stale]

    def ids(self) -> List[str]:
        """Root ids, most recently updated first."""
        return sorted(
            self._states,
            key=lambda key: self._states[key].kvs.get("updated", ""),
            reverse=True,
        )

    def get(self, root_id: str) -> Optional[FlowState]:
        return self._states.get(root_id)

    def latest(self) -> Optional[FlowState]:
        ids = self.ids()
        return self._states[ids[0]] if ids else None

    def __len__(self) -> int:
        return len(self._states)
