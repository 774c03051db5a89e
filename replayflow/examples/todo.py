"""
To-do list: every message adds an item, "/checkN" ticks item N off.

The flow finishes after each message, so the list itself lives outside
the continuation, in a caller-owned TodoLists.
"""

from typing import Dict, List

from ..core.flow import Flow

EMPTY_TEXT = "Nothing is planned yet. Send any text to add it to the to-do list."


class TodoLists:
    def __init__(self) -> None:
        self._lists: Dict[str, List[dict]] = {}

    def items(self, chat: str) -> List[dict]:
        return self._lists.setdefault(chat, [])

    def render(self, chat: str) -> str:
        items = self.items(chat)
        if not items:
            return EMPTY_TEXT

        checked = "\n".join(item["text"] for item in items if item["check"])
        open_items = [item for item in items if not item["check"]]
        unchecked = "\n".join(f"/check{i} — {item['text']}" for i, item in enumerate(open_items))
        return f"{checked}\n\n{unchecked}"


def todo(lists: TodoLists) -> Flow:
    async def handler(run) -> None:
        message = await run.prompt()
        text = message.text
        if text is None:
            return

        items = lists.items(run.chat)
        if text.startswith("/check"):
            try:
                index = int(text[len("/check"):])
            except ValueError:
                index = -1
            open_items = [item for item in items if not item["check"]]
            if 0 <= index < len(open_items):
                open_items[index]["check"] = True
        elif not text.startswith("/"):
            items.append({"text": text, "check": False})

        await run.send(lists.render(run.chat))

    return Flow("todo", handler)
