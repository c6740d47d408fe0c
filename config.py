import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_flag(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # MongoDB
    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/MentorMatch")
    MONGO_ENSURE_INDEXES = _env_flag("MONGO_ENSURE_INDEXES", True)

    # Access tokens
    JWT_SECRET_KEY = os.getenv("JWT_KEY", "makematch")
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRES_HOURS = 26
    REQUIRE_AUTH = _env_flag("REQUIRE_AUTH", False)

    PASSWORD_HASH_METHOD = os.getenv("PASSWORD_HASH_METHOD", "scrypt")

    # Cloudinary
    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUD")
    CLOUDINARY_API_KEY = os.getenv("API_KEY")
    CLOUDINARY_API_SECRET = os.getenv("API_SECRET")

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    PORT = int(os.getenv("PORT", "5001"))


class TestConfig(Config):
    TESTING = True
    MONGO_URI = "mongodb://localhost:27017/MentorMatchTest"
    MONGO_ENSURE_INDEXES = False
    JWT_SECRET_KEY = "test-secret"
    REQUIRE_AUTH = False
    # Cheap hashing keeps the suite fast
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"
    CLOUDINARY_CLOUD_NAME = "test"
    CLOUDINARY_API_KEY = "test"
    CLOUDINARY_API_SECRET = "test"
