# halaleco/routes/dashboard.py
from typing import Any, Dict

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from ..auth.dependencies import optional_user

router = APIRouter(tags=["dashboard"])

SERVICES = [
    {"name": "Halal Validator", "endpoint": "/validate-halal"},
    {"name": "Halal Compliance", "endpoint": "/halal-compliance"},
    {"name": "Fraud Detection", "endpoint": "/fraud-detection"},
    {"name": "Supply Chain Tracking", "endpoint": "/supply-chain/track"},
    {"name": "Blockchain Verification", "endpoint": "/blockchain/verify"},
]


@router.get("/dashboard")
def dashboard(user: Dict[str, Any] | None = Depends(optional_user)):
    if user is None:
        return RedirectResponse(url="/login", status_code=307)
    return {
        "success": True,
        "user": {"id": user["userId"], "email": user["email"], "role": user.get("role", "user")},
        "services": SERVICES,
    }
