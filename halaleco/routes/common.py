# halaleco/routes/common.py
import time
from datetime import datetime, timezone
from typing import Any, Dict


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def envelope(data: Any, request_prefix: str | None = None, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True, "data": data, "timestamp": now_iso()}
    if request_prefix:
        body["requestId"] = f"{request_prefix}-{int(time.time() * 1000)}"
    body.update(extra)
    return body


def documentation(**doc: Any) -> Dict[str, Any]:
    return {"success": True, "documentation": doc}
