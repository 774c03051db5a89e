"""
Example flows: a counter, a to-do list and a blackjack game.
"""

from .counter import counter
from .todo import TodoLists, todo
from .blackjack import Scoreboard, blackjack, stats

__all__ = [
    "counter",
    "TodoLists",
    "todo",
    "Scoreboard",
    "blackjack",
    "stats",
]
