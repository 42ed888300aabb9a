# halaleco/auth/passwords.py
from typing import Dict, Tuple

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, InvalidHashError
from argon2.low_level import Type

from ..config import settings
from ..hashing import normalize_value

_ph = PasswordHasher(
    time_cost=2, memory_cost=102400, parallelism=8, hash_len=32, type=Type.ID
)

# email -> (id, name, role)
DEMO_ACCOUNTS: Dict[str, Tuple[str, str, str]] = {
    "admin@halaleco.com": ("1", "HalalEco Admin", "admin"),
    "analyst@halaleco.com": ("2", "Compliance Analyst", "analyst"),
    "user@halaleco.com": ("3", "Demo User", "user"),
}


def hash_password(password: str) -> str:
    # full encoded hash, salt embedded
    return _ph.hash(password)


def verify_password(stored_hash: str, password: str) -> bool:
    try:
        return _ph.verify(stored_hash, password)
    except (VerificationError, InvalidHashError):
        return False


class AccountDirectory:
    """In-process login directory; hashes are computed once at construction."""

    def __init__(self, accounts: Dict[str, Tuple[str, str, str]] = DEMO_ACCOUNTS,
                 password: str | None = None):
        pw = password or settings.DEMO_PASSWORD
        self._accounts = {
            email: (uid, name, role, hash_password(pw))
            for email, (uid, name, role) in accounts.items()
        }

    def authenticate(self, email: str, password: str) -> Dict[str, str] | None:
        row = self._accounts.get(normalize_value("email", email))
        if row is None:
            return None
        uid, name, role, pw_hash = row
        if not verify_password(pw_hash, password):
            return None
        return {"id": uid, "email": normalize_value("email", email), "name": name, "role": role}
