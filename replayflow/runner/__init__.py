"""
Root driver: run the root flow for one event and classify the outcome.
"""

from .runner import Outcome, RunResult, execute

__all__ = [
    "Outcome",
    "RunResult",
    "execute",
]
