"""
Replayflow CLI - Resumable Conversational Flows

Commands:
- replayflow state list/show/drop - Inspect stored continuations
- replayflow demo counter/todo/blackjack - Drive an example flow from the terminal
- replayflow version
"""

__version__ = "0.1.0"
