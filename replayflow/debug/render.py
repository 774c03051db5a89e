"""
Render continuation trees with rich.
"""

import json
from typing import Any

from rich.markup import escape
from rich.tree import Tree

from ..core.state import FlowState

STATUS_STYLES = {
    "error": ("❌", "red"),
    "executed": ("✔", "green"),
    "pending": ("⏳", "yellow"),
}


def status_of(node: FlowState) -> str:
    if node.error is not None:
        return "error"
    if node.executed:
        return "executed"
    return "pending"


def _short(value: Any, width: int = 120) -> str:
    text = json.dumps(value, ensure_ascii=False, sort_keys=True)
    return text if len(text) <= width else text[: width - 1] + "…"


def _label(node: FlowState) -> str:
    icon, style = STATUS_STYLES[status_of(node)]
    return f"[bold blue]{escape(node.id)}[/bold blue] [{style}]{icon}[/{style}]"


def _fill(tree: Tree, node: FlowState, show_kvs: bool) -> None:
    if node.executed and node.error is None:
        tree.add(f"[dim]result:[/dim] {escape(_short(node.result))}")
    if show_kvs and node.kvs:
        tree.add(f"[dim]kvs:[/dim] {escape(_short(node.kvs))}")
    for child in node.subflows:
        _fill(tree.add(_label(child)), child, show_kvs)
    if node.error is not None:
        tree.add(f"[red]error:[/red] {escape(node.error.get('type', ''))}: {escape(node.error.get('message', ''))}")


def render_state(state: FlowState, show_kvs: bool = True) -> Tree:
    """
    Build a rich Tree for a continuation, root first.

    Example:
        Console().print(render_state(state))
    """
    tree = Tree(_label(state))
    _fill(tree, state, show_kvs)
    return tree
