# tests/conftest.py
import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DEMO_PASSWORD", "halaleco-demo")

import random

import pytest
from fastapi.testclient import TestClient

from halaleco.auth.tokens import issue_token
from halaleco.ledger.adapter import MockLedger
from halaleco.main import app

FIXED_NOW = 1_700_000_000.0


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def ledger():
    return MockLedger(clock=lambda: FIXED_NOW)


@pytest.fixture
def rng():
    return random.Random(7)


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {issue_token('3', 'user@halaleco.com', 'user')}"}


@pytest.fixture
def analyst_headers():
    return {"Authorization": f"Bearer {issue_token('2', 'analyst@halaleco.com', 'analyst')}"}


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {issue_token('1', 'admin@halaleco.com', 'admin')}"}
