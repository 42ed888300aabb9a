# halaleco/routes/compliance.py
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..auth.dependencies import current_user
from ..dependencies import get_ledger
from ..errors import ServiceError
from ..ledger.adapter import MockLedger
from ..schemas import HalalComplianceRequest, ValidationRequest
from ..services import compliance, validator
from ..utils.logging import logger
from .common import documentation, envelope

router = APIRouter(tags=["compliance"])


@router.post("/validate-halal")
def validate_halal(payload: ValidationRequest,
                   user: Dict[str, Any] = Depends(current_user),
                   ledger: MockLedger = Depends(get_ledger)):
    try:
        result = validator.validate(payload, ledger)
    except Exception as e:
        logger.exception("Validation error product=%r", payload.product)
        raise ServiceError("Validation service error", error=str(e))
    return envelope(result.dump(), "VAL")


@router.post("/halal-compliance")
def halal_compliance(payload: HalalComplianceRequest,
                     user: Dict[str, Any] = Depends(current_user),
                     ledger: MockLedger = Depends(get_ledger)):
    try:
        result = compliance.validate_product(payload, ledger)
    except Exception as e:
        logger.exception("Halal compliance analysis error product=%r", payload.product)
        raise ServiceError("Compliance analysis service error", error=str(e))
    return envelope(result.dump(), "REQ")


@router.get("/halal-compliance")
def halal_compliance_docs(user: Dict[str, Any] = Depends(current_user)):
    return documentation(
        endpoint="/halal-compliance",
        method="POST",
        description="Comprehensive Halal compliance analysis for products",
        requiredFields=["product", "ingredients"],
        optionalFields=[
            "certificationId", "supplier", "price", "sellerRating",
            "certificationImage", "category", "slaughterMethod", "origin",
        ],
        responseFields=[
            "isHalalCompliant", "haramIngredients", "certificationAuthority", "blockchainTxHash",
            "confidenceScore", "recommendedAlternatives", "complianceDetails", "riskAssessment",
        ],
        example={
            "request": {
                "product": "Beef Jerky",
                "ingredients": ["beef", "salt", "spices", "natural flavors"],
                "certificationId": "JAKIM-2023-BJ001",
                "category": "meat",
                "slaughterMethod": "halal",
                "origin": "Malaysia",
            },
            "response": {
                "isHalalCompliant": True,
                "haramIngredients": [],
                "certificationAuthority": "JAKIM Malaysia",
                "recommendedAlternatives": [],
            },
        },
    )
