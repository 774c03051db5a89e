"""
Event model for inbound flow events.

Events are immutable records of something the transport observed
(a message, a button press, an edit). The engine only looks at ``kind``;
everything else is payload for the flows.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


class EventKind:
    """Discriminator values for FlowEvent.kind."""
    MESSAGE = "message"
    CALLBACK = "callback"
    EDIT = "edit"

    ALL = (MESSAGE, CALLBACK, EDIT)


@dataclass(frozen=True)
class FlowEvent:
    """
    Immutable inbound event.

    Fields:
        kind: One of EventKind.ALL
        payload: Transport data (JSON values only)
        subject: Owner of the continuation (chat/user id), if known
    """
    kind: str
    payload: Dict[str, Any] = field(default_factory=dict)
    subject: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind not in EventKind.ALL:
            raise ValueError(f"unknown event kind: {self.kind}")

    @property
    def text(self) -> Optional[str]:
        """Message text, falling back to a caption."""
        return self.payload.get("text", self.payload.get("caption"))

    @property
    def data(self) -> Optional[str]:
        """Callback data of a button press."""
        return self.payload.get("data")

    @property
    def message_id(self) -> Optional[int]:
        return self.payload.get("message_id")

    @property
    def callback_id(self) -> Optional[str]:
        return self.payload.get("id")

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "payload": dict(self.payload), "subject": self.subject}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "FlowEvent":
        return FlowEvent(
            kind=data["kind"],
            payload=dict(data.get("payload") or {}),
            subject=data.get("subject"),
        )

    @staticmethod
    def message(text: str, message_id: Optional[int] = None, subject: Optional[str] = None, **extra: Any) -> "FlowEvent":
        payload: Dict[str, Any] = {"text": text, **extra}
        if message_id is not None:
            payload["message_id"] = message_id
        return FlowEvent(kind=EventKind.MESSAGE, payload=payload, subject=subject)

    @staticmethod
    def callback(data: str, callback_id: Optional[str] = None, subject: Optional[str] = None, **extra: Any) -> "FlowEvent":
        payload: Dict[str, Any] = {"data": data, **extra}
        if callback_id is not None:
            payload["id"] = callback_id
        return FlowEvent(kind=EventKind.CALLBACK, payload=payload, subject=subject)

    @staticmethod
    def edit(text: str, message_id: int, subject: Optional[str] = None, **extra: Any) -> "FlowEvent":
        payload: Dict[str, Any] = {"text": text, "message_id": message_id, **extra}
        return FlowEvent(kind=EventKind.EDIT, payload=payload, subject=subject)
