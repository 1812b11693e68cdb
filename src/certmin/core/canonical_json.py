"""
Canonical JSON Serialization

Deterministic JSON with sorted keys, used for receipt hashes and for
exporting results. Non-finite floats (an unbounded min_ub is +inf)
are written as the strings "inf", "-inf" and "nan" so the output stays
strict JSON.
"""

import json
import hashlib
import math
from typing import Any


def _finite_safe(obj: Any) -> Any:
    if isinstance(obj, float) and not math.isfinite(obj):
        return str(obj)
    if isinstance(obj, dict):
        return {k: _finite_safe(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_finite_safe(v) for v in obj]
    return obj


def canonical_dumps(obj: Any, indent: int = None) -> str:
    """
    Canonical JSON serialization with sorted keys.

    Args:
        obj: Object to serialize
        indent: Indentation level (None for compact)

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        _finite_safe(obj),
        sort_keys=True,
        separators=(',', ':') if indent is None else None,
        indent=indent,
        allow_nan=False,
        default=str
    )


def canonical_hash(obj: Any) -> str:
    """Hex SHA-256 digest of the canonical JSON form of ``obj``."""
    return hashlib.sha256(canonical_dumps(obj).encode()).hexdigest()
