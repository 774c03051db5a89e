"""
Chat layer: transport interface, waiting for input, command routing.
"""

from .transport import Button, ChatTransport, OutboundMessage
from .run import ChatFlowRun
from .commands import Command, command_router
from .dispatcher import FlowDispatcher

__all__ = [
    "Button",
    "ChatTransport",
    "OutboundMessage",
    "ChatFlowRun",
    "Command",
    "command_router",
    "FlowDispatcher",
]
