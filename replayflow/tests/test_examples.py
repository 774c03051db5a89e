"""
Tests for the example flows driven through the dispatcher.
"""

import asyncio
import random

from replayflow.chat.commands import Command
from replayflow.chat.dispatcher import FlowDispatcher
from replayflow.core.events import FlowEvent
from replayflow.examples import Scoreboard, TodoLists, blackjack, counter, stats, todo
from replayflow.examples.blackjack import format_hand, hand_value, new_deck
from replayflow.examples.todo import EMPTY_TEXT
from replayflow.runner.runner import Outcome
from replayflow.storage.memory_store import InMemoryStateStore

from .fakes import CLOCK, FakeTransport


def _send(dispatcher, *events):
    return [asyncio.run(dispatcher.handle(event, "42")) for event in events]


def test_counter_buttons():
    transport = FakeTransport()
    dispatcher = FlowDispatcher(transport, [Command("/start", "Start", counter())], clock=CLOCK)

    _send(
        dispatcher,
        FlowEvent.message("/start", message_id=1),
        FlowEvent.callback("/inc", callback_id="a"),
        FlowEvent.callback("/add10", callback_id="b"),
        FlowEvent.message("typing does nothing", message_id=2),
        FlowEvent.callback("/double", callback_id="c"),
    )

    assert transport.texts() == [
        "Current value: 0",
        "Current value: 1",
        "Current value: 11",
        "Current value: 22",
    ]
    assert len(transport.of("send")) == 1


def test_todo_list():
    transport = FakeTransport()
    lists = TodoLists()
    dispatcher = FlowDispatcher(transport, todo(lists), clock=CLOCK)

    results = _send(
        dispatcher,
        FlowEvent.message("/help", message_id=1),
        FlowEvent.message("Buy milk", message_id=2),
        FlowEvent.message("Call mom", message_id=3),
        FlowEvent.message("/check0", message_id=4),
    )

    assert all(r.outcome is Outcome.COMPLETED for r in results)
    assert transport.texts()[0] == EMPTY_TEXT
    assert transport.texts()[2] == "\n\n/check0 — Buy milk\n/check1 — Call mom"
    assert transport.texts()[3] == "Buy milk\n\n/check0 — Call mom"
    assert lists.items("42") == [{"text": "Buy milk", "check": True}, {"text": "Call mom", "check": False}]


def test_todo_ignores_bad_check_index():
    lists = TodoLists()
    dispatcher = FlowDispatcher(FakeTransport(), todo(lists), clock=CLOCK)

    _send(dispatcher, FlowEvent.message("Buy milk", message_id=1), FlowEvent.message("/check7", message_id=2))
    _send(dispatcher, FlowEvent.message("/checkx", message_id=3))

    assert lists.items("42") == [{"text": "Buy milk", "check": False}]


def test_hand_value_and_format():
    hand = [{"suit": "♠️", "value": "A"}, {"suit": "♥️", "value": "K"}, {"suit": "♦️", "value": "6"}]

    assert hand_value(hand) == 21
    assert format_hand(hand) == "A♠️ K♥️ 6♦️ (21)"
    assert hand_value([]) == 0


def test_new_deck_is_complete_and_seeded():
    deck = new_deck(random.Random(3))

    assert len(deck) == 52
    assert len({(c["suit"], c["value"]) for c in deck}) == 52
    assert deck == new_deck(random.Random(3))


def _blackjack(seed):
    transport = FakeTransport()
    scoreboard = Scoreboard()
    dispatcher = FlowDispatcher(
        transport,
        [
            Command("/new", "Start a new game", blackjack(scoreboard, rng=random.Random(seed), dealer_delay=0)),
            Command("/stats", "Show play statistics", stats(scoreboard)),
        ],
        store=InMemoryStateStore(),
        clock=CLOCK,
        debug=True,
    )
    return dispatcher, transport, scoreboard


def test_blackjack_stand_finishes_game():
    dispatcher, transport, scoreboard = _blackjack(seed=11)

    results = _send(dispatcher, FlowEvent.message("/new", message_id=1), FlowEvent.callback("/stand", callback_id="s"))

    assert [r.outcome for r in results] == [Outcome.SUSPENDED, Outcome.COMPLETED]
    assert transport.of("send") == [("send", "42", "Starting a new game...")]
    assert "Start a /new game?" in transport.texts()[-1]
    assert scoreboard.player + scoreboard.dealer >= 1
    assert dispatcher.store.load("42") is None


def test_blackjack_dealer_draws_unused_cards():
    dispatcher, transport, scoreboard = _blackjack(seed=5)

    results = _send(dispatcher, FlowEvent.message("/new", message_id=1), FlowEvent.callback("/stand", callback_id="s"))

    game = results[-1].state.subflows[0].subflows[1]
    assert game.id == "blackjack"
    by_id = {}
    for node in game.subflows:
        by_id.setdefault(node.id, []).append(node)
    deck = by_id["memo"][0].result
    player = by_id["players-turn"][0].result
    dealer = by_id["dealers-turn"][0].result
    assert player == deck[:1]
    assert dealer == deck[1:1 + len(dealer)]
    assert hand_value(dealer) >= 17


def test_blackjack_deck_survives_replays():
    dispatcher, transport, scoreboard = _blackjack(seed=2)

    _send(dispatcher, FlowEvent.message("/new", message_id=1))
    first = dispatcher.registry.latest().subflows[0].subflows[1].subflows[1]
    _send(dispatcher, FlowEvent.message("ignored text", message_id=2))
    second = dispatcher.registry.latest().subflows[0].subflows[1].subflows[1]

    assert first.id == second.id == "memo"
    assert first.result == second.result


def test_stats_reports_scoreboard():
    dispatcher, transport, scoreboard = _blackjack(seed=1)
    scoreboard.player = 2
    scoreboard.dealer = 3

    _send(dispatcher, FlowEvent.message("/stats", message_id=1))

    assert transport.texts() == ["Player: 2 vs Dealer: 3"]
