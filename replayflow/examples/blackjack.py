"""
Blackjack against a dealer, played on a single message edited in place.

Card values follow the "ochko" convention: J=2, Q=3, K=4, A=11.
"""

import asyncio
import random
from typing import List, Optional

from ..chat.transport import Button
from ..core.flow import Flow

SUITS = ["♠️", "♥️", "♦️", "♣️"]
VALUES = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
FACE_POINTS = {"A": 11, "J": 2, "Q": 3, "K": 4}

TURN_BUTTONS = [[Button("🃏 Hit", "/hit"), Button("✋ Stand", "/stand")]]


class Scoreboard:
    """Wins per side, shared by every game of the process."""

    def __init__(self) -> None:
        self.player = 0
        self.dealer = 0

    def render(self) -> str:
        return f"Player: {self.player} vs Dealer: {self.dealer}"


def new_deck(rng: Optional[random.Random] = None) -> List[dict]:
    deck = [{"suit": suit, "value": value} for suit in SUITS for value in VALUES]
    (rng or random).shuffle(deck)
    return deck


def hand_value(hand: List[dict]) -> int:
    return sum(FACE_POINTS.get(card["value"]) or int(card["value"]) for card in hand)


def format_hand(hand: List[dict]) -> str:
    cards = " ".join(f"{card['value']}{card['suit']}" for card in hand)
    return f"{cards} ({hand_value(hand)})"


def _draw(deck: List[dict], index: int) -> dict:
    if index >= len(deck):
        raise ValueError("Deck is empty")
    return deck[index]


def players_turn(deck: List[dict], update) -> Flow:
    async def handler(run) -> List[dict]:
        hand = [_draw(deck, 0)]

        while True:
            await update(f"🎯 <b>Your turn</b>\n\n👤 <b>Hand</b>: {format_hand(hand)}", TURN_BUTTONS)

            pressed = await run.callback()
            if pressed.data == "/hit":
                hand.append(_draw(deck, len(hand)))
                if hand_value(hand) >= 21:
                    return hand
            elif pressed.data == "/stand":
                return hand

    return Flow("players-turn", handler)


def dealers_turn(deck: List[dict], player: List[dict], update, delay: float) -> Flow:
    # the dealer draws from the cards the player did not take
    async def handler(run) -> List[dict]:
        hand: List[dict] = []
        while hand_value(hand) < 17:
            hand.append(_draw(deck, len(player) + len(hand)))
            await update(
                f"🏪 <b>Dealer's turn...</b>\n\n👤 <b>Hand</b>: {format_hand(player)}\n"
                f"🏪 Dealer's hand: {format_hand(hand)}"
            )
            if delay:
                await asyncio.sleep(delay)
        return hand

    return Flow("dealers-turn", handler)


def game_over(scoreboard: Scoreboard, player: List[dict], dealer: List[dict]) -> Flow:
    """Decide the game; None while the dealer still has to play."""

    async def handler(run) -> Optional[str]:
        players = hand_value(player)
        hands = f"👤 <b>Hand</b>: {format_hand(player)}"
        if players == 21:
            scoreboard.player += 1
            return f"🎉 <b>You hit 21!</b>\n\n{hands}\n\nStart a /new game?"
        if players > 21:
            scoreboard.dealer += 1
            return f"😞 <b>You went over 21! Dealer wins</b>\n\n{hands}\n\nStart a /new game?"
        if not dealer:
            return None

        dealers = hand_value(dealer)
        hands += f"\n🏪 Dealer's hand: {format_hand(dealer)}"
        if dealers > 21:
            scoreboard.player += 1
            return f"🎉 <b>Dealer went over 21! You win</b>\n\n{hands}\n\nStart a /new game?"
        if dealers > players:
            scoreboard.dealer += 1
            return f"😞 <b>Dealer wins</b>\n\n{hands}\n\nStart a /new game?"
        if dealers < players:
            scoreboard.player += 1
            return f"🎉 <b>You win!</b>\n\n{hands}\n\nStart a /new game?"

        scoreboard.dealer += 1
        scoreboard.player += 1
        return f"🤝 <b>It's a tie!</b>\n\n{hands}\n\nStart a /new game?"

    return Flow("game-over", handler)


def blackjack(scoreboard: Scoreboard, rng: Optional[random.Random] = None, dealer_delay: float = 1.5) -> Flow:
    async def handler(run) -> None:
        ui = await run.send("Starting a new game...")

        async def shuffled() -> List[dict]:
            return new_deck(rng)

        # shuffling is not deterministic, so the deck is recorded once
        deck = await run.memo(shuffled)

        async def update(content: str, buttons=None) -> None:
            await run.send(content, replace=ui["message_id"], parse_mode="HTML", buttons=buttons)

        player = await run.subflow(players_turn(deck, update))
        outcome = await run.subflow(game_over(scoreboard, player, []))
        if outcome is not None:
            await run.send(outcome, replace=ui["message_id"], parse_mode="HTML")
            return

        dealer = await run.subflow(dealers_turn(deck, player, update, dealer_delay))
        outcome = await run.subflow(game_over(scoreboard, player, dealer))
        await run.send(outcome or "", replace=ui["message_id"], parse_mode="HTML")

    return Flow("blackjack", handler)


def stats(scoreboard: Scoreboard) -> Flow:
    async def handler(run) -> None:
        await run.send(scoreboard.render())

    return Flow("stats", handler)
