# halaleco/routes/blockchain.py
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..auth.dependencies import current_user
from ..dependencies import get_ledger
from ..errors import ServiceError
from ..ledger.adapter import MockLedger
from ..schemas import CreateRecordInput, VerifyCertificationInput
from ..utils.logging import logger

router = APIRouter(prefix="/blockchain", tags=["blockchain"])


@router.post("/verify")
def verify_certification(payload: VerifyCertificationInput,
                         user: Dict[str, Any] = Depends(current_user),
                         ledger: MockLedger = Depends(get_ledger)):
    try:
        verification = ledger.verify_certification(payload.certification_id)
    except Exception as e:
        logger.exception("Blockchain verification error id=%s", payload.certification_id)
        raise ServiceError("Blockchain verification failed", error=str(e))
    return {"success": True, "data": verification.to_dict()}


@router.post("/create-record")
def create_record(payload: CreateRecordInput,
                  user: Dict[str, Any] = Depends(current_user),
                  ledger: MockLedger = Depends(get_ledger)):
    try:
        receipt = ledger.create_record(payload.dump())
    except Exception as e:
        logger.exception("Blockchain record creation error product=%s", payload.product_id)
        raise ServiceError("Failed to create blockchain record", error=str(e))
    return {
        "success": receipt.success,
        "data": {"transactionHash": receipt.transaction_hash} if receipt.success else None,
        "message": "Certification record created" if receipt.success else receipt.error,
    }
