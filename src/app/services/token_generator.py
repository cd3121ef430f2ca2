import secrets

TOKEN_BYTES = 32


class TokenGenerator:
    """Bearer secrets for sessions and reset tokens: 32 random bytes, hex encoded."""

    def generate(self) -> str:
        return secrets.token_hex(TOKEN_BYTES)
