from typing import List, Optional

from jose import jws
from jose.exceptions import JWSError

ALGORITHM = "HS256"


class CookieSigner:
    """
    Tamper-evident wrapper for cookie values.

    The value is carried as an HS256 JWS. Verification also accepts the
    previous secret while keys are being rotated.
    """

    def __init__(self, secret: str, previous_secret: Optional[str] = None):
        self.secret = secret
        self.previous_secret = previous_secret

    @property
    def verification_keys(self) -> List[str]:
        keys = [self.secret]
        if self.previous_secret:
            keys.append(self.previous_secret)
        return keys

    def sign(self, value: str) -> str:
        """
        Sign a cookie value

        Args:
            value: Raw value (the session token)

        Returns:
            Compact JWS string (header.payload.signature)
        """
        return jws.sign(value.encode(), self.secret, algorithm=ALGORITHM)

    def unsign(self, signed_value: Optional[str]) -> Optional[str]:
        """
        Verify a signed cookie value

        Args:
            signed_value: Value read from the cookie

        Returns:
            Raw value, or None if missing, malformed or signed with an unknown key
        """
        if not signed_value:
            return None

        for key in self.verification_keys:
            try:
                payload = jws.verify(signed_value, key, algorithms=[ALGORITHM])
            except JWSError:
                continue
            return payload.decode()

        return None
