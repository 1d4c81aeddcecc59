import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")


def _flag(name, default="0"):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # "memory" keeps everything in process; "sqlalchemy" uses the database below
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'budgetbuddy.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    DEFAULT_USER_ID = os.getenv("DEFAULT_USER_ID", "mock-user-id")
    MONTHLY_BUDGET = float(os.getenv("MONTHLY_BUDGET", "4000"))
    SEED_DEMO_DATA = _flag("SEED_DEMO_DATA")

    ADVICE_PROVIDER = os.getenv("ADVICE_PROVIDER", "openai")
    ADVICE_TIMEOUT = float(os.getenv("ADVICE_TIMEOUT", "30"))
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
    GEMINI_BASE_URL = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5000,http://localhost:5173")


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    STORAGE_BACKEND = "memory"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SEED_DEMO_DATA = False
    DEFAULT_USER_ID = "mock-user-id"
    MONTHLY_BUDGET = 4000.0
    ADVICE_PROVIDER = "openai"
    ADVICE_TIMEOUT = 5
    OPENAI_API_KEY = "test-key"
    GEMINI_API_KEY = "test-key"
