import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Cookie signing
    AUTH_SECRET = data.get("AUTH_SECRET", "dev-secret-key-change-in-production-0000")
    AUTH_PREVIOUS_SECRET = data.get("AUTH_PREVIOUS_SECRET")

    # Sessions (seconds)
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "sump_session")
    SESSION_ABSOLUTE_TIMEOUT = data.get("SESSION_ABSOLUTE_TIMEOUT", 2592000)  # 30 days
    SESSION_IDLE_TIMEOUT = data.get("SESSION_IDLE_TIMEOUT", 604800)  # 7 days
    SESSION_SECURE = data.get("SESSION_SECURE")  # None -> derived from ENVIRONMENT
    SESSION_SAME_SITE = data.get("SESSION_SAME_SITE", "lax")

    # Passwords
    PASSWORD_MIN_LENGTH = data.get("PASSWORD_MIN_LENGTH", 8)
    PASSWORD_MAX_LENGTH = data.get("PASSWORD_MAX_LENGTH", 72)
    PASSWORD_SALT_ROUNDS = data.get("PASSWORD_SALT_ROUNDS", 12)
    RESET_TOKEN_TTL = data.get("RESET_TOKEN_TTL", 3600)  # 1 hour
