import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Fail closed on rows/carousels whose columns or slides cannot be parsed.
    # Off by default: a malformed layout spec converges to zero children.
    STRICT_LAYOUT_SPECS = _env_flag("STRICT_LAYOUT_SPECS")

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///content_tree_dev.db")

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-secret-key-with-enough-length-for-hmac"
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length-for-hmac"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    STRICT_LAYOUT_SPECS = False

config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
