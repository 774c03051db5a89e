"""
Canonical serialization for continuation trees.

All flow results and stored state go through these functions so that the
persisted form is identical across runs and platforms.
"""

import json
from typing import Any

from .errors import FlowError


def canonicalize(obj: Any) -> Any:
    """
    Convert arbitrary nested dict/list to canonical form.

    Rules:
    - dict keys sorted alphabetically
    - tuples converted to lists
    - recursive normalization
    """
    if isinstance(obj, dict):
        return {k: canonicalize(obj[k]) for k in sorted(obj.keys())}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    return obj


def canonical_json_str(obj: Any) -> str:
    """
    Deterministic JSON string (for storage).

    Guarantees:
    - sort_keys=True
    - separators remove whitespace
    - ensure_ascii=False keeps UTF-8 stable
    """
    canon = canonicalize(obj)
    return json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def clone(obj: Any) -> Any:
    """
    Structural copy through a JSON round trip.

    Returns a value that shares no mutable state with ``obj``. Only JSON
    values are accepted (None, bool, int, float, str, lists and
    string-keyed dicts of the same).

    Raises:
        FlowError: If obj is not JSON-representable
    """
    if obj is None:
        return None
    try:
        return json.loads(json.dumps(obj, ensure_ascii=False, allow_nan=False))
    except (TypeError, ValueError) as ex:
        raise FlowError(f"flow result is not JSON-serializable: {ex}") from ex
