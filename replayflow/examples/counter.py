"""
Counter: one message edited in place, driven by buttons.
"""

from ..chat.transport import Button
from ..core.flow import Flow

BUTTONS = [[
    Button("Increment", "/inc"),
    Button("Add 10", "/add10"),
    Button("Double", "/double"),
]]


def counter() -> Flow:
    async def handler(run) -> None:
        value = 0
        ui = None

        while True:
            ui = await run.send(
                f"Current value: {value}",
                replace=ui["message_id"] if ui else None,
                buttons=BUTTONS,
            )

            pressed = await run.callback()
            if pressed.data == "/inc":
                value += 1
            elif pressed.data == "/add10":
                value += 10
            elif pressed.data == "/double":
                value *= 2

    return Flow("counter", handler)
