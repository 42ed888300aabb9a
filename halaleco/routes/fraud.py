# halaleco/routes/fraud.py
import random
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..auth.dependencies import current_user
from ..dependencies import get_rng
from ..errors import ServiceError
from ..schemas import FraudDetectionRequest
from ..services.fraud import analyze_for_fraud
from ..utils.logging import logger
from .common import documentation, envelope

router = APIRouter(prefix="/fraud-detection", tags=["fraud"])


@router.post("")
def fraud_detection(payload: FraudDetectionRequest,
                    user: Dict[str, Any] = Depends(current_user),
                    rng: random.Random = Depends(get_rng)):
    try:
        result = analyze_for_fraud(payload, rng)
    except Exception as e:
        logger.exception("Fraud detection error product=%s", payload.product_id)
        raise ServiceError("Fraud detection service error", error=str(e))
    return envelope(result.dump(), "FRAUD")


@router.get("")
def fraud_detection_docs(user: Dict[str, Any] = Depends(current_user)):
    return documentation(
        endpoint="/fraud-detection",
        method="POST",
        description="Fraud detection for Halal e-commerce listings",
        requiredFields=["productId", "productName", "price", "sellerRating", "sellerHistory"],
        optionalFields=[
            "certificationImage", "ingredients", "productImages",
            "description", "category", "supplier", "location",
        ],
        responseFields=[
            "riskScore", "riskLevel", "redFlags", "recommendedAction",
            "confidence", "fraudProbability", "detailedAnalysis", "recommendations",
        ],
        riskLevels={
            "low": "0-2 risk score",
            "medium": "3-5 risk score",
            "high": "6-7 risk score",
            "critical": "8-10 risk score",
        },
        actions={
            "approve": "Product can be listed",
            "flag": "Product needs monitoring",
            "block": "Product should be blocked",
            "manual_review": "Requires human review",
        },
    )
