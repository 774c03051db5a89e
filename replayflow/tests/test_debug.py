"""
Tests for the debug registry and tree rendering.
"""

from rich.console import Console

from replayflow.core.state import FlowState
from replayflow.debug import DebugRegistry, render_state, status_of


def _state(root_id, updated):
    return FlowState(id=root_id, kvs={"updated": updated})


def test_registry_orders_by_updated():
    registry = DebugRegistry()

    registry.record(_state("a", "2026-01-01T00:00:01"))
    registry.record(_state("b", "2026-01-01T00:00:03"))
    registry.record(_state("c", "2026-01-01T00:00:02"))

    assert registry.ids() == ["b", "c", "a"]
    assert registry.latest().id == "b"


def test_registry_snapshots_state():
    registry = DebugRegistry()
    state = _state("a", "t1")

    registry.record(state)
    state.kvs["updated"] = "t2"

    assert registry.get("a").kvs["updated"] == "t1"


def test_registry_limit_drops_oldest():
    registry = DebugRegistry(limit=2)

    for i in range(4):
        registry.record(_state(f"s{i}", f"t{i}"))

    assert registry.ids() == ["s3", "s2"]
    assert registry.get("s0") is None


def test_empty_registry():
    assert DebugRegistry().latest() is None


def test_status_of():
    assert status_of(FlowState(id="x")) == "pending"
    assert status_of(FlowState(id="x", executed=True)) == "executed"
    assert status_of(FlowState(id="x", executed=True, error={"type": "E", "message": "m"})) == "error"


def test_render_state_shows_tree():
    state = FlowState(
        id="root-1",
        kvs={"updated": "t"},
        subflows=[
            FlowState(id="counter", subflows=[
                FlowState(id="send", executed=True, result={"message_id": 100}),
                FlowState(id="input[x]"),
            ]),
        ],
    )
    console = Console(record=True, width=200)

    console.print(render_state(state))
    text = console.export_text()

    assert "root-1" in text
    assert "counter" in text
    assert "input[x]" in text
    assert '"message_id": 100' in text
    assert "kvs:" in text


def test_render_state_shows_error_and_hides_kvs():
    state = FlowState(
        id="root-1",
        executed=True,
        kvs={"updated": "t"},
        error={"type": "ValueError", "message": "boom"},
    )
    console = Console(record=True, width=200)

    console.print(render_state(state, show_kvs=False))
    text = console.export_text()

    assert "ValueError: boom" in text
    assert "kvs:" not in text
