"""
Test suite for replayflow.

Focus areas:
- Replay determinism and memoization
- Suspend/resume across persistence round trips
- Failure localization
- Waiting for input (prompt/callback/watch)
"""
