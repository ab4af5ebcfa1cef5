import os
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Uploaded media is stored in the database; cap the request size
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_UPLOAD_BYTES", 50 * 1024 * 1024))

    EXCERPT_MAX_LENGTH = 160
    PUBLIC_PAGE_SIZE = 6
    PUBLIC_MAX_PAGE_SIZE = 24
    READ_WORDS_PER_MINUTE = 200

    LOGIN_URL = "/login"
    EDITOR_URL = "/editor"
    ESSAY_URL_PREFIX = "/essay"
    MEDIA_URL_PREFIX = "/api/media"

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///fieldnotes-dev.db")

class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    JWT_SECRET_KEY = SECRET_KEY
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
