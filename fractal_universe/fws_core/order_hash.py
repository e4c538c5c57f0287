"""
Deterministic hashing for search fingerprints.

Provides:
- hash64: SHA-256 canonical hash truncated to 64-bit int
- depth_table_hash: Order-independent fingerprint of a depth map

No use of Python's built-in hash() (randomized per process for str).
"""

import hashlib
import json
from typing import Any, Dict, Hashable

from .types import Depth


def hash64(obj: Any) -> int:
    """
    Deterministic 64-bit hash using SHA-256 on canonical JSON.

    - Canonical JSON serialization (sorted keys, no whitespace)
    - Tuples serialize as lists, so (1, 2) and [1, 2] hash identically

    Args:
        obj: Any JSON-serializable Python object

    Returns:
        64-bit integer hash (0 to 2^64-1)

    Examples:
        >>> hash64([1, 2, 3]) == hash64((1, 2, 3))
        True
        >>> hash64({"a": 1, "b": 2}) == hash64({"b": 2, "a": 1})
        True
    """
    canonical_json = json.dumps(obj, sort_keys=True, separators=(",", ":"))
    sha = hashlib.sha256(canonical_json.encode("utf-8"))
    return int.from_bytes(sha.digest()[:8], byteorder="big", signed=False)


def depth_table_hash(table: Dict[Hashable, Depth]) -> int:
    """
    Fingerprint of a Pattern→Depth or Word→Depth map.

    Entries are sorted by key first, so insertion order doesn't matter.
    """
    entries = sorted(table.items())
    return hash64([[key, int(depth)] for key, depth in entries])
