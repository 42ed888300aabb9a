# halaleco/hashing.py
import json
from typing import Any

TX_HASH_HEX_CHARS = 64


def normalize_value(id_type: str, value: str | None) -> str:
    """
    Normalize identifier values prior to encoding.
    - email: lowercase + trim
    - anything else: trim only
    """
    if value is None:
        return ""
    v = value.strip()
    if id_type == "email":
        v = v.lower()
    return v


def serialize_payload(payload: Any) -> str:
    # compact separators, insertion order kept; dates and other objects fall back to str()
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


def hex_reference(value: str) -> str:
    return "0x" + value.encode("utf-8").hex()


def fabricate_tx_hash(payload: Any) -> str:
    """
    Placeholder transaction hash: hex of the serialized payload, cut to 64 hex chars.
    Deterministic for a given payload; not a digest and not collision resistant.
    """
    return "0x" + serialize_payload(payload).encode("utf-8").hex()[:TX_HASH_HEX_CHARS]
