# halaleco/dependencies.py
import random
from functools import lru_cache

from fastapi import Depends

from .auth.passwords import AccountDirectory
from .config import settings
from .ledger.adapter import MockLedger
from .ledger.store import FakeStore
from .services.imagery import make_rng
from .services.supply_chain import SupplyChainTracker


@lru_cache
def get_directory() -> AccountDirectory:
    # argon2 hashing of the demo accounts happens once, on first login
    return AccountDirectory()


def get_ledger() -> MockLedger:
    return MockLedger(explorer_tx_url=settings.EXPLORER_TX_URL)


def get_rng() -> random.Random:
    # one per request; seeded when RANDOM_SEED is set
    return make_rng(settings.RANDOM_SEED)


def get_tracker(ledger: MockLedger = Depends(get_ledger),
                rng: random.Random = Depends(get_rng)) -> SupplyChainTracker:
    return SupplyChainTracker(ledger=ledger, store=FakeStore(), rng=rng)
