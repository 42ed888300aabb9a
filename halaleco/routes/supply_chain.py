# halaleco/routes/supply_chain.py
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from ..auth.dependencies import current_user, require_roles
from ..dependencies import get_tracker
from ..errors import ServiceError
from ..schemas import AnalyticsAction, ContaminationData, StageInput, TrackingQuery
from ..services.supply_chain import STAGE_TEMPLATES, SupplyChainTracker
from ..utils.logging import logger
from .common import documentation, envelope

router = APIRouter(prefix="/supply-chain", tags=["supply-chain"])

DEFAULT_WINDOW = timedelta(days=30)


def _missing(message: str):
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def _track(tracker: SupplyChainTracker, query: TrackingQuery, not_found: str):
    try:
        record = tracker.track(query)
    except Exception as e:
        logger.exception("Supply chain tracking error")
        raise ServiceError("Supply chain tracking service error", error=str(e))
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=not_found)
    return record


# -----------------------------
# Tracking
# -----------------------------
@router.post("/track")
def track_post(query: TrackingQuery,
               user: Dict[str, Any] = Depends(current_user),
               tracker: SupplyChainTracker = Depends(get_tracker)):
    if query.is_empty():
        raise _missing("At least one tracking parameter is required")
    record = _track(tracker, query, "Product not found in supply chain")
    return envelope(record.dump(), "TRACK")


@router.get("/track")
def track_get(product_id: str | None = Query(None, alias="productId"),
              batch_number: str | None = Query(None, alias="batchNumber"),
              qr_code: str | None = Query(None, alias="qrCode"),
              blockchain_hash: str | None = Query(None, alias="blockchainHash"),
              user: Dict[str, Any] = Depends(current_user),
              tracker: SupplyChainTracker = Depends(get_tracker)):
    query = TrackingQuery(product_id=product_id, batch_number=batch_number,
                          qr_code=qr_code, blockchain_hash=blockchain_hash)
    if query.is_empty():
        return documentation(
            endpoint="/supply-chain/track",
            methods=["GET", "POST"],
            description="Track products through the Halal supply chain",
            queryParameters=["productId", "batchNumber", "qrCode", "blockchainHash"],
            responseFields=[
                "productId", "productName", "batchNumber", "stages",
                "currentStage", "overallCompliance", "riskScore", "alerts",
            ],
            stageTypes=list(STAGE_TEMPLATES),
        )
    record = _track(tracker, query, "Product not found")
    return envelope(record.dump())


# -----------------------------
# Analytics
# -----------------------------
@router.get("/analytics")
def analytics(start_date: datetime | None = Query(None, alias="startDate"),
              end_date: datetime | None = Query(None, alias="endDate"),
              user: Dict[str, Any] = Depends(require_roles("admin", "analyst")),
              tracker: SupplyChainTracker = Depends(get_tracker)):
    end = end_date or datetime.now(timezone.utc)
    start = start_date or end - DEFAULT_WINDOW
    try:
        result = tracker.generate_analytics(int(start.timestamp() * 1000), int(end.timestamp() * 1000))
    except Exception as e:
        logger.exception("Supply chain analytics error")
        raise ServiceError("Analytics service error", error=str(e))
    return envelope(result.dump(), dateRange={"start": start.isoformat(), "end": end.isoformat()})


@router.post("/analytics")
def manage(payload: AnalyticsAction,
           user: Dict[str, Any] = Depends(require_roles("admin", message="Admin access required")),
           tracker: SupplyChainTracker = Depends(get_tracker)):
    data = payload.data
    try:
        if payload.action == "detect_contamination":
            if not data.get("recordId") or not data.get("contaminationData"):
                raise _missing("recordId and contaminationData are required")
            contamination = ContaminationData.model_validate(data["contaminationData"])
            alerts = tracker.detect_contamination(data["recordId"], contamination)
            return envelope({"alerts": [a.dump() for a in alerts]},
                            message="Contamination detection completed")

        if payload.action == "create_record":
            if not all(data.get(k) for k in ("productId", "productName", "batchNumber")):
                raise _missing("productId, productName, and batchNumber are required")
            record = tracker.create_record(data["productId"], data["productName"], data["batchNumber"])
            return envelope(record.dump(), message="Supply chain record created")

        if payload.action == "add_stage":
            if not data.get("recordId") or not data.get("stageData"):
                raise _missing("recordId and stageData are required")
            stage = StageInput.model_validate(data["stageData"])
            record = tracker.add_stage(data["recordId"], stage)
            return envelope(record.dump(), message="Supply chain stage added")
    except ValidationError as e:
        raise _missing(f"Invalid {payload.action} data: {e.errors()[0]['msg']}")
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Supply chain management error action=%s", payload.action)
        raise ServiceError("Supply chain management error", error=str(e))

    raise _missing("Invalid action")
