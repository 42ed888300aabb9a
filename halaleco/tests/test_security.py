# tests/test_security.py
from datetime import datetime, timedelta, timezone

import jwt

from halaleco.auth.passwords import AccountDirectory, hash_password, verify_password
from halaleco.auth.tokens import issue_token, verify_token
from halaleco.config import settings


def test_token_roundtrip():
    claims = verify_token(issue_token("42", "a@b.com", "analyst"))
    assert claims["userId"] == "42"
    assert claims["email"] == "a@b.com"
    assert claims["role"] == "analyst"
    assert claims["exp"] - claims["iat"] == settings.JWT_EXPIRES_IN_DAYS * 86400


def test_tampered_token():
    token = issue_token("42", "a@b.com")
    assert verify_token(token[:-2] + ("AA" if not token.endswith("AA") else "BB")) is None
    forged = jwt.encode({"userId": "42", "email": "a@b.com", "role": "admin"}, "other", algorithm="HS256")
    assert verify_token(forged) is None


def test_expired_token():
    past = datetime.now(timezone.utc) - timedelta(days=1)
    token = jwt.encode({"userId": "1", "email": "x@y.z", "role": "user", "exp": past},
                       settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    assert verify_token(token) is None


def test_token_missing_claims():
    now = datetime.now(timezone.utc)
    never_expires = jwt.encode({"userId": "1", "email": "a@b.c", "role": "admin", "iat": now},
                               settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    assert verify_token(never_expires) is None

    anonymous = jwt.encode({"role": "admin", "iat": now, "exp": now + timedelta(days=1)},
                           settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    assert verify_token(anonymous) is None


def test_password_hash():
    h = hash_password("s3cret")
    assert h.startswith("$argon2id$")
    assert verify_password(h, "s3cret")
    assert not verify_password(h, "nope")
    assert not verify_password("not-a-hash", "s3cret")


def test_account_directory():
    d = AccountDirectory(accounts={"ops@halaleco.com": ("9", "Ops", "admin")}, password="pw")
    user = d.authenticate(" OPS@halaleco.com", "pw")
    assert user == {"id": "9", "email": "ops@halaleco.com", "name": "Ops", "role": "admin"}
    assert d.authenticate("ops@halaleco.com", "wrong") is None
    assert d.authenticate("nobody@halaleco.com", "pw") is None
