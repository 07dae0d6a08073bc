"""Deterministic fingerprint of evaluation inputs using xxhash.

Two evaluations with equal (actor, category, snapshot) inputs produce the
same digest regardless of dict or set ordering, so the service can reuse
exported tiers between identical requests.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any

import xxhash


def _plain(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    return obj


def _default(obj: Any) -> Any:
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    raise TypeError(f"cannot fingerprint {type(obj).__name__}")


def canonical_json(*parts: Any) -> bytes:
    """Key-sorted compact JSON of dataclass instances and plain values."""
    payload = [_plain(part) for part in parts]
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), default=_default).encode("utf-8")


def fingerprint(*parts: Any) -> int:
    """64-bit digest of the canonical JSON of ``parts``."""
    return xxhash.xxh64(canonical_json(*parts)).intdigest()
