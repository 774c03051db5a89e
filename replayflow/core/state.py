"""
Continuation model.

FlowState is the only persisted entity: one node per flow invocation,
forming a tree that mirrors the call structure of the handlers.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .canonical import canonical_json_str
from .errors import FlowStateError


@dataclass
class FlowState:
    """
    Mutable continuation node.

    Fields:
        id: Id of the flow this node represents
        executed: True once the handler returned without suspending
        result: Cloned return value of the handler (JSON value)
        error: {"type", "message", "traceback"} if execution failed
        subflows: Child nodes in invocation order
        kvs: Node-private string scratch space

    Mutated in place by RunContext during one event; persisted as JSON.
    """
    id: str
    executed: bool = False
    subflows: List["FlowState"] = field(default_factory=list)
    result: Any = None
    error: Optional[Dict[str, Any]] = None
    kvs: Dict[str, str] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return self.error is not None

    def last_child(self) -> Optional["FlowState"]:
        return self.subflows[-1] if self.subflows else None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "executed": self.executed,
            "subflows": [s.to_dict() for s in self.subflows],
            "kvs": dict(self.kvs),
        }
        if self.executed or self.result is not None:
            data["result"] = self.result
        if self.error is not None:
            data["error"] = self.error
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "FlowState":
        if not isinstance(data, dict) or "id" not in data:
            raise FlowStateError("continuation node must be an object with an 'id'")
        return FlowState(
            id=str(data["id"]),
            executed=bool(data.get("executed", False)),
            subflows=[FlowState.from_dict(s) for s in data.get("subflows", [])],
            result=data.get("result"),
            error=data.get("error"),
            kvs=dict(data.get("kvs", {})),
        )

    def to_json(self) -> str:
        return canonical_json_str(self.to_dict())

    @staticmethod
    def from_json(blob: str) -> "FlowState":
        try:
            data = json.loads(blob)
        except ValueError as ex:
            raise FlowStateError(f"continuation is not valid JSON: {ex}") from ex
        return FlowState.from_dict(data)
