"""
Tests for FlowDispatcher: per-subject persistence and command routing.
"""

import asyncio

import pytest

from replayflow.chat.commands import Command, command_router
from replayflow.chat.dispatcher import FAILURE_ALERT, FlowDispatcher
from replayflow.core.errors import FlowError, StateStoreError
from replayflow.core.events import FlowEvent
from replayflow.core.flow import Flow
from replayflow.core.state import FlowState
from replayflow.examples import counter
from replayflow.runner.runner import Outcome
from replayflow.storage.memory_store import InMemoryStateStore

from .fakes import CLOCK, FakeTransport


def _dispatcher(root, **kwargs):
    transport = FakeTransport()
    store = InMemoryStateStore()
    dispatcher = FlowDispatcher(transport, root, store=store, clock=CLOCK, **kwargs)
    return dispatcher, transport, store


def handle(dispatcher, event, subject=None):
    return asyncio.run(dispatcher.handle(event, subject))


def test_command_starts_flow_and_persists_state():
    dispatcher, transport, store = _dispatcher([Command("/start", "Start a counter", counter())])

    result = handle(dispatcher, FlowEvent.message("/start", message_id=1, subject="42"))

    assert result.outcome is Outcome.SUSPENDED
    assert transport.texts() == ["Current value: 0"]
    assert FlowState.from_json(store.load("42")).subflows[0].id == "root"


def test_callback_advances_and_is_answered():
    dispatcher, transport, store = _dispatcher([Command("/start", "Start a counter", counter())])

    handle(dispatcher, FlowEvent.message("/start", message_id=1, subject="42"))
    handle(dispatcher, FlowEvent.callback("/inc", callback_id="cb1", subject="42"))

    assert ("edit", "42", 100, "Current value: 1") in transport.calls
    assert transport.of("answer") == [("answer", "cb1", None, False)]


def test_subjects_are_isolated():
    dispatcher, transport, store = _dispatcher([Command("/start", "Start a counter", counter())])

    handle(dispatcher, FlowEvent.message("/start", message_id=1, subject="a"))
    handle(dispatcher, FlowEvent.callback("/add10", callback_id="cb1", subject="a"))
    handle(dispatcher, FlowEvent.callback("/add10", callback_id="cb2", subject="b"))

    assert store.subjects() == ["a", "b"]
    assert transport.texts() == ["Current value: 0", "Current value: 10"]
    assert FlowState.from_json(store.load("b")).subflows[0].subflows[0].id == "input"


def test_new_command_resets_conversation():
    dispatcher, transport, store = _dispatcher([Command("/start", "Start a counter", counter())])

    handle(dispatcher, FlowEvent.message("/start", message_id=1, subject="42"))
    handle(dispatcher, FlowEvent.callback("/inc", callback_id="cb1", subject="42"))
    handle(dispatcher, FlowEvent.message("/start", message_id=2, subject="42"))

    assert transport.of("send") == [("send", "42", "Current value: 0"), ("send", "42", "Current value: 0")]

    handle(dispatcher, FlowEvent.callback("/double", callback_id="cb2", subject="42"))
    assert transport.calls[-2] == ("edit", "42", 101, "Current value: 0")


def test_unknown_message_while_idle_completes():
    dispatcher, transport, store = _dispatcher([Command("/start", "Start a counter", counter())])

    result = handle(dispatcher, FlowEvent.message("hello", message_id=1, subject="42"))

    assert result.outcome is Outcome.COMPLETED
    assert store.load("42") is None
    assert transport.calls == []


def test_completed_flow_deletes_record():
    async def once(run):
        await run.prompt()
        return await run.send("done")

    dispatcher, transport, store = _dispatcher(Flow("once", once))
    store.save("42", FlowState(id="old", subflows=[FlowState(id="once")]).to_json())

    result = handle(dispatcher, FlowEvent.message("go", message_id=1, subject="42"))

    assert result.outcome is Outcome.COMPLETED
    assert store.load("42") is None


def test_failed_callback_gets_alert_and_record_dropped():
    async def fragile(run):
        await run.callback()
        raise RuntimeError("broken")

    dispatcher, transport, store = _dispatcher(Flow("fragile", fragile))

    result = handle(dispatcher, FlowEvent.callback("/x", callback_id="cb9", subject="42"))

    assert result.outcome is Outcome.FAILED
    assert result.error["message"] == "broken"
    assert store.load("42") is None
    assert transport.of("answer") == [("answer", "cb9", FAILURE_ALERT, True)]


def test_debug_records_states():
    dispatcher, transport, store = _dispatcher([Command("/start", "Start a counter", counter())], debug=True)

    result = handle(dispatcher, FlowEvent.message("/start", message_id=1, subject="42"))

    assert dispatcher.registry.get(result.state.id) == result.state
    assert dispatcher.registry.get(result.state.id) is not result.state


def test_registry_untouched_without_debug():
    dispatcher, transport, store = _dispatcher([Command("/start", "Start a counter", counter())])

    handle(dispatcher, FlowEvent.message("/start", message_id=1, subject="42"))

    assert len(dispatcher.registry) == 0


def test_explicit_subject_wins():
    dispatcher, transport, store = _dispatcher([Command("/start", "Start a counter", counter())])

    handle(dispatcher, FlowEvent.message("/start", message_id=1, subject="42"), subject="override")

    assert store.subjects() == ["override"]


def test_missing_subject_is_an_error():
    dispatcher, transport, store = _dispatcher([Command("/start", "Start a counter", counter())])

    with pytest.raises(FlowError):
        handle(dispatcher, FlowEvent.message("/start", message_id=1))


def test_store_failure_propagates():
    class BrokenStore(InMemoryStateStore):
        def load(self, subject):
            raise StateStoreError("disk on fire")

    dispatcher = FlowDispatcher(FakeTransport(), [Command("/start", "Start", counter())], store=BrokenStore())

    with pytest.raises(StateStoreError):
        handle(dispatcher, FlowEvent.message("/start", message_id=1, subject="42"))


def test_register_commands_publishes_menu():
    dispatcher, transport, store = _dispatcher([
        Command("/start", "Start a counter", counter()),
        Command("/help", "Show help", counter()),
    ])

    asyncio.run(dispatcher.register_commands())

    assert transport.calls == [("commands", [("/start", "Start a counter"), ("/help", "Show help")])]


def test_register_commands_noop_for_single_root():
    dispatcher, transport, store = _dispatcher(counter())

    asyncio.run(dispatcher.register_commands())

    assert transport.calls == []


def test_command_router_id_is_root():
    assert command_router([]).id == "root"
