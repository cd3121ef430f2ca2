"""
Password Service

bcrypt hashing and strength validation. A pure primitive: it never decides
whether a weak password is acceptable, the callers do.
"""

import logging
from typing import List, Optional

import bcrypt
from pydantic import BaseModel

from src.app.auth_config import PasswordConfig

logger = logging.getLogger(__name__)

# bcrypt only reads the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class StrengthResult(BaseModel):
    """Outcome of a strength check, listing every violated rule"""

    valid: bool
    errors: List[str]


def _encode(password: str) -> bytes:
    return password.encode()[:BCRYPT_MAX_BYTES]


class PasswordService:
    def __init__(self, config: Optional[PasswordConfig] = None):
        self.config = config or PasswordConfig()

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt at the configured cost"""
        salt = bcrypt.gensalt(self.config.salt_rounds)
        return bcrypt.hashpw(_encode(password), salt).decode()

    def verify(self, password: str, password_hash: Optional[str]) -> bool:
        """Check a password against a stored hash. Malformed hashes never match."""
        if not password_hash:
            return False
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode())
        except ValueError:
            logger.warning("Password verification against malformed hash")
            return False

    def validate_strength(self, password: str) -> StrengthResult:
        errors: List[str] = []
        min_length = self.config.min_length
        max_length = self.config.max_length

        if len(password) < min_length:
            errors.append(f"Password must be at least {min_length} characters")

        if len(password) > max_length:
            errors.append(f"Password must be at most {max_length} characters")

        return StrengthResult(valid=not errors, errors=errors)

    def burn_time(self) -> None:
        """
        Hash a throwaway value at the configured cost so that a miss
        (unknown account) takes about as long as a real verification.
        """
        bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(self.config.salt_rounds))
