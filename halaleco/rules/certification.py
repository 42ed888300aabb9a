# halaleco/rules/certification.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Literal

from ..ledger.adapter import MockLedger
from ..utils.logging import logger
from .tables import AUTHORITY_PREFIXES, NOT_CERTIFIED, UNKNOWN_AUTHORITY

LEDGER_TRUST = 95
PATTERN_TRUST = 75
UNKNOWN_TRUST = 25

Method = Literal["ledger", "pattern", "manual"]


@dataclass(frozen=True)
class CertificationRecord:
    is_valid: bool
    authority: str
    trust_score: int
    verification_method: Method
    expiry_date: str | None = None

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "authority": self.authority,
            "expiryDate": self.expiry_date,
            "verificationMethod": self.verification_method,
            "trustScore": self.trust_score,
        }


def identify_authority(certification_id: str) -> str:
    cid = certification_id.upper()
    for prefix, authority in AUTHORITY_PREFIXES:
        if cid.startswith(prefix):
            return authority
    return UNKNOWN_AUTHORITY


def verify(certification_id: str | None, ledger: MockLedger, image: object | None = None) -> CertificationRecord:
    """
    Ledger first, then the prefix table.
    `image` is accepted for parity with the upload form; it does not affect the result.
    """
    if not certification_id:
        return CertificationRecord(False, NOT_CERTIFIED, 0, "manual")

    try:
        onchain = ledger.verify_certification(certification_id)
    except Exception:
        logger.exception("Ledger lookup failed for certification %s", certification_id)
        return CertificationRecord(False, "Verification Failed", 0, "manual")

    if onchain.is_valid:
        return CertificationRecord(
            True,
            onchain.authority or UNKNOWN_AUTHORITY,
            LEDGER_TRUST,
            "ledger",
            onchain.expiry_date,
        )

    authority = identify_authority(certification_id)
    known = authority != UNKNOWN_AUTHORITY
    return CertificationRecord(known, authority, PATTERN_TRUST if known else UNKNOWN_TRUST, "pattern")
