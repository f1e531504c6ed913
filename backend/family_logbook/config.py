import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


def env_flag(name, default):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        minutes=int(os.getenv("JWT_ACCESS_TOKEN_MINUTES", "60"))
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Resolved pages are cached per process. Invalidation does not reach
    # other worker processes, so only enable it for single-process servers.
    PAGE_CACHE_ENABLED = env_flag("PAGE_CACHE_ENABLED", "false")

    # Invite codes
    INVITE_CODE_MAX_USES = int(os.getenv("INVITE_CODE_MAX_USES", "10"))
    INVITE_CODE_MAX_USES_LIMIT = 100

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    PAGE_CACHE_ENABLED = env_flag("PAGE_CACHE_ENABLED", "true")
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///family_logbook.db")

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    LOG_LEVEL = "DEBUG"
    PAGE_CACHE_ENABLED = True

config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
