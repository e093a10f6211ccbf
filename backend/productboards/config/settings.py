"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


class Config:
    # Runtime
    TESTING = os.getenv("TESTING", "false").lower() in _TRUTHY
    DEBUG = os.getenv("DEBUG", "false").lower() in _TRUTHY
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH", "") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )

    # AI gateway (OpenAI-compatible chat completions)
    AI_GATEWAY_URL = os.getenv("AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1")
    AI_API_KEY = os.getenv("AI_API_KEY", "")
    AI_MODEL = os.getenv("AI_MODEL", "google/gemini-2.5-flash")
    AI_TIMEOUT_SECONDS = float(os.getenv("AI_TIMEOUT_SECONDS", "40"))
    AI_CONNECT_TIMEOUT = float(os.getenv("AI_CONNECT_TIMEOUT", "10"))
    AI_MAX_RETRIES = int(os.getenv("AI_MAX_RETRIES", "0"))

    # Auth (bearer JWT issued by the identity provider)
    AUTH_JWT_SECRET = os.getenv("AUTH_JWT_SECRET", "")
    AUTH_JWT_AUDIENCE = os.getenv("AUTH_JWT_AUDIENCE", "authenticated")
    AUTH_JWT_ISSUER = os.getenv("AUTH_JWT_ISSUER", "") or None

    # Redis settings (insert feed)
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    FEED_CHANNEL_PREFIX: str = os.getenv("FEED_CHANNEL_PREFIX", "productboards")

    # Postgresql Database settings
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    CONVERSATION_USER_LIMIT: int = int(os.getenv("CONVERSATION_USER_LIMIT", "200"))

    # Domain settings
    TITLE_MAX_LENGTH: int = int(os.getenv("TITLE_MAX_LENGTH", "100"))
    SHARE_TOKEN_LENGTH: int = int(os.getenv("SHARE_TOKEN_LENGTH", "8"))
    DEFAULT_TIMEZONE: str = os.getenv("DEFAULT_TIMEZONE", "UTC")


class DevelopmentConfig(Config):
    """Development configuration"""

    DEBUG = True


class TestingConfig(Config):
    """Testing configuration"""

    TESTING = True


class ProductionConfig(Config):
    """Production configuration"""

    pass


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    if env is None:
        env = os.getenv("APP_ENV", "development")
    return config.get(env, config["default"])
