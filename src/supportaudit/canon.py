"""
Canonical JSON Serialization

Provides deterministic JSON serialization for hashing and comparison.
Based on RFC 8785 (JSON Canonicalization Scheme) principles:
- Sorted keys (lexicographic)
- No whitespace
- Consistent number formatting
- UTF-8 encoding

Used to fingerprint decisions and schemas, so that "same inputs, same
decision" can be checked by comparing two short strings.
"""
from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import Decision, PolicySchema


def canonical_json(obj: Any) -> str:
    """
    Serialize object to canonical JSON string.

    The output is deterministic: same input always produces same output.
    Input must already be plain JSON data (to_dict() output); NaN and
    infinity are rejected.

    Example:
        >>> canonical_json({"b": 1, "a": 2})
        '{"a":2,"b":1}'
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        allow_nan=False,
        ensure_ascii=False,
    )


def canonical_json_bytes(obj: Any) -> bytes:
    """Serialize object to canonical JSON as UTF-8 bytes."""
    return canonical_json(obj).encode("utf-8")


def content_hash(obj: Any) -> str:
    """
    Compute SHA-256 hash of canonical JSON representation.

    Returns:
        Hex-encoded SHA-256 hash string (64 characters)
    """
    return hashlib.sha256(canonical_json_bytes(obj)).hexdigest()


def content_hash_short(obj: Any, length: int = 12) -> str:
    """Compute truncated SHA-256 hash for display purposes."""
    return content_hash(obj)[:length]


def schema_hash(schema: PolicySchema) -> str:
    """
    Compute SHA-256 hash of a policy schema.

    Rule order is significant (it drives rationale order), so rules are
    hashed in schema order rather than sorted.
    """
    return content_hash(schema.to_dict())


def decision_fingerprint(decision: Decision) -> str:
    """
    Compute a short, stable fingerprint of a decision.

    Two evaluations of the same (conversation, schema) pair always yield
    the same fingerprint.
    """
    return content_hash_short(decision.to_dict(), length=16)
