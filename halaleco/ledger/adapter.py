# halaleco/ledger/adapter.py
"""
Mock ledger. Nothing here talks to a chain: "verification" is prefix matching
on the certification id, and "transactions" are fabricated from the payload
(see hashing.fabricate_tx_hash).
"""
from __future__ import annotations
import time
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict

from ..hashing import fabricate_tx_hash, hex_reference
from ..rules.tables import LEDGER_VALID_PREFIXES
from ..utils.logging import logger

# fabricated chain height: anchored at a mainnet block, one block per 12s
_ANCHOR_BLOCK = 18_000_000
_ANCHOR_TS = 1_693_000_000
_BLOCK_TIME_S = 12

CERTIFICATION_TTL = timedelta(days=365)
LEDGER_AUTHORITY = "JAKIM Malaysia"


@dataclass(frozen=True)
class LedgerReceipt:
    success: bool
    transaction_hash: str | None = None
    error: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "transactionHash": self.transaction_hash, "error": self.error}


@dataclass(frozen=True)
class LedgerVerification:
    is_valid: bool
    blockchain_record: Dict[str, Any] | None = None
    certification_data: Dict[str, Any] = field(default_factory=dict)

    @property
    def authority(self) -> str | None:
        return self.certification_data.get("authority")

    @property
    def expiry_date(self) -> str | None:
        return self.certification_data.get("expiryDate")

    @property
    def verification_hash(self) -> str | None:
        return (self.blockchain_record or {}).get("verificationHash")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "blockchainRecord": self.blockchain_record,
            "certificationData": self.certification_data or None,
        }


class MockLedger:
    def __init__(self, explorer_tx_url: str = "https://etherscan.io/tx/{tx_hash}",
                 clock: Callable[[], float] = time.time):
        self._explorer_tx_url = explorer_tx_url
        self._clock = clock

    def _now(self) -> datetime:
        return datetime.fromtimestamp(self._clock(), tz=timezone.utc)

    def block_number(self) -> int:
        return _ANCHOR_BLOCK + max(0, int(self._clock()) - _ANCHOR_TS) // _BLOCK_TIME_S

    def explorer_link(self, tx_hash: str | None) -> str:
        if not tx_hash:
            return ""
        return self._explorer_tx_url.format(tx_hash=tx_hash)

    def verify_certification(self, certification_id: str) -> LedgerVerification:
        cert_id = certification_id or ""
        # raw id, case-sensitive: " JAKIM-1" and "jakim-1" are not on the ledger
        is_valid = cert_id.startswith(LEDGER_VALID_PREFIXES)
        now = self._now()
        record = {
            "blockNumber": self.block_number(),
            "timestamp": int(now.timestamp() * 1000),
            "verificationHash": hex_reference(cert_id),
        }
        data = {
            "id": cert_id,
            "authority": LEDGER_AUTHORITY if is_valid else "Unknown",
            "status": "Active" if is_valid else "Invalid",
            "expiryDate": (now + CERTIFICATION_TTL).isoformat(),
        }
        logger.debug("ledger verify id=%s valid=%s", cert_id, is_valid)
        return LedgerVerification(is_valid=is_valid, blockchain_record=record, certification_data=data)

    def create_record(self, payload: Dict[str, Any]) -> LedgerReceipt:
        """Always succeeds; the hash is fabricated from the payload."""
        tx_hash = fabricate_tx_hash(payload)
        logger.debug("ledger record tx=%s", tx_hash)
        return LedgerReceipt(success=True, transaction_hash=tx_hash)

    def certification_expiry(self) -> str:
        return (self._now() + CERTIFICATION_TTL).isoformat()
