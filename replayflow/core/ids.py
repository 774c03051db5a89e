"""
Identifier generation for root continuations.
"""

import uuid


def new_root_id() -> str:
    """
    Generate an identifier for a fresh continuation tree.

    Root ids are only used to tell trees apart (debug registry, logs);
    unlike subflow ids they are never compared during replay.
    """
    return uuid.uuid4().hex
