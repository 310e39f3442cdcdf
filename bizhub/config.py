import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///bizhub.db")
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT Configuration
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "fallback-secret-key")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=24)
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"

    # flask-restful swallows non-HTTP errors unless they propagate to the app handlers
    PROPAGATE_EXCEPTIONS = True
    # Keep NotFound messages as raised, without route suggestions
    ERROR_404_HELP = False

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
        if origin.strip()
    ]

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    AUTO_MIGRATE = os.getenv("AUTO_MIGRATE", "false").lower() == "true"

    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@bizhub.local")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    AUTO_MIGRATE = False
    LOG_LEVEL = "WARNING"
