"""
Auth Configuration

Explicit configuration passed to the session and password services.
Nothing in the services reads the environment directly.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from src.domain.entities import SameSitePolicy


class SessionConfig(BaseModel):
    """Session lifetime and cookie attributes"""

    cookie_name: str = Field(default="sump_session", min_length=1)
    # Absolute timeout - max session lifetime regardless of activity
    absolute_timeout: int = Field(default=2592000, gt=0)
    # Idle timeout - max inactivity before the session expires
    idle_timeout: int = Field(default=604800, gt=0)
    secure: bool = False
    same_site: SameSitePolicy = SameSitePolicy.lax


class PasswordConfig(BaseModel):
    """Password strength rules, bcrypt cost and reset token lifetime"""

    min_length: int = Field(default=8, ge=6)
    max_length: int = Field(default=72, le=128)  # bcrypt only reads 72 bytes
    salt_rounds: int = Field(default=12, ge=4, le=15)
    reset_token_ttl: int = Field(default=3600, gt=0)


class AuthConfig(BaseModel):
    """Top-level auth configuration"""

    # Cookie signing key
    secret: str = Field(..., min_length=32)
    # Accepted for verification only, while rotating keys
    previous_secret: Optional[str] = Field(default=None, min_length=32)

    session: SessionConfig = Field(default_factory=SessionConfig)
    password: PasswordConfig = Field(default_factory=PasswordConfig)

    @field_validator("previous_secret", mode="before")
    @classmethod
    def _blank_previous_secret(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    @classmethod
    def from_application_config(cls, app_config) -> "AuthConfig":
        """Build AuthConfig from the yaml-backed ApplicationConfig class"""
        secure = app_config.SESSION_SECURE
        if secure is None:
            secure = app_config.ENVIRONMENT == "production"

        return cls(
            secret=app_config.AUTH_SECRET,
            previous_secret=app_config.AUTH_PREVIOUS_SECRET,
            session=SessionConfig(
                cookie_name=app_config.SESSION_COOKIE_NAME,
                absolute_timeout=app_config.SESSION_ABSOLUTE_TIMEOUT,
                idle_timeout=app_config.SESSION_IDLE_TIMEOUT,
                secure=bool(secure),
                same_site=app_config.SESSION_SAME_SITE,
            ),
            password=PasswordConfig(
                min_length=app_config.PASSWORD_MIN_LENGTH,
                max_length=app_config.PASSWORD_MAX_LENGTH,
                salt_rounds=app_config.PASSWORD_SALT_ROUNDS,
                reset_token_ttl=app_config.RESET_TOKEN_TTL,
            ),
        )
