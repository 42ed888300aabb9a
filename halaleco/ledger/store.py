# halaleco/ledger/store.py
import time
from typing import Callable

from ..schemas import SupplyChainRecord

DAY_MS = 86_400_000
SAMPLE_PRODUCT_ID = "sample-product-id"


class FakeStore:
    """
    Stand-in for a supply-chain record store.

    Nothing is persisted. Every lookup fabricates a fresh record for the id, so
    two reads of the same id can disagree (timestamps, stages added earlier).
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def get_record(self, record_id: str) -> SupplyChainRecord:
        now = self._now_ms()
        return SupplyChainRecord(
            product_id=record_id,
            product_name="Sample Product",
            batch_number="BATCH-001",
            blockchain_hash="0x123...",
            qr_code="HALAL-SC-123",
            created_at=now - DAY_MS,
            updated_at=now,
        )

    def find_by_qr_code(self, qr_code: str) -> SupplyChainRecord:
        return self.get_record(SAMPLE_PRODUCT_ID)

    def find_by_hash(self, blockchain_hash: str) -> SupplyChainRecord:
        return self.get_record(SAMPLE_PRODUCT_ID)

    def find_by_product(self, product_id: str | None, batch_number: str | None = None) -> SupplyChainRecord:
        # batch-only lookups have no product id to echo back
        return self.get_record(product_id or SAMPLE_PRODUCT_ID)
