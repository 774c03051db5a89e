"""
Chat transport interface.

The engine never talks to a chat API directly; ChatFlowRun calls these
methods from inside subflows, so every return value ends up stored in a
continuation and must be a JSON value.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Button:
    """Inline button; pressing it produces a callback event carrying ``data``."""
    text: str
    data: str

    def to_dict(self) -> Dict[str, str]:
        return {"text": self.text, "data": self.data}


@dataclass(frozen=True)
class OutboundMessage:
    """
    Message to send or to replace an existing message with.

    Fields:
        text: Text (or photo caption)
        photo: Transport file id of a photo, if any
        entities: Transport-specific formatting entities
        buttons: Rows of inline buttons
        parse_mode: Transport markup mode (e.g. "HTML")
        reply_to: Message id to reply to
        disable_preview: Suppress link previews
    """
    text: str
    photo: Optional[str] = None
    entities: List[Dict[str, Any]] = field(default_factory=list)
    buttons: List[List[Button]] = field(default_factory=list)
    parse_mode: Optional[str] = None
    reply_to: Optional[int] = None
    disable_preview: bool = False

    @staticmethod
    def build(
        content: Union[str, Dict[str, Any]],
        buttons: Optional[Sequence[Sequence[Button]]] = None,
        parse_mode: Optional[str] = None,
        reply_to: Optional[int] = None,
        disable_preview: bool = False,
    ) -> "OutboundMessage":
        """Accept plain text or a {"text", "entities", "photo"} mapping."""
        if isinstance(content, str):
            text, photo, entities = content, None, []
        else:
            text = content.get("text", "")
            photo = content.get("photo")
            entities = list(content.get("entities") or [])
        return OutboundMessage(
            text=text,
            photo=photo,
            entities=entities,
            buttons=[list(row) for row in (buttons or [])],
            parse_mode=parse_mode,
            reply_to=reply_to,
            disable_preview=disable_preview,
        )


class ChatTransport(ABC):
    """
    Outbound side of a chat transport.

    Implementations own provider-specific error recovery (e.g. treating
    "message is not modified" on edit as success).
    """

    @abstractmethod
    async def send_message(self, chat: str, message: OutboundMessage) -> Dict[str, Any]:
        """Send a message; returns the sent message (must include "message_id")."""
        ...

    @abstractmethod
    async def edit_message(self, chat: str, message_id: int, message: OutboundMessage) -> Dict[str, Any]:
        """Replace an existing message; returns the resulting message."""
        ...

    @abstractmethod
    async def delete_message(self, chat: str, message_id: int) -> None:
        ...

    @abstractmethod
    async def answer_callback(self, callback_id: str, text: Optional[str] = None, alert: bool = False) -> None:
        """Acknowledge a button press."""
        ...

    async def set_commands(self, commands: List[Tuple[str, str]]) -> None:
        """Publish (command, description) pairs; transports without a command menu ignore this."""
        return None
