# app/core/config.py

import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    def __init__(self):
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./portfolio.db")
        self.REDIS_URL = os.getenv("REDIS_URL")

        # CORS: frontend origin + local dev servers + anything extra from ALLOWED_ORIGINS
        origins = [os.getenv("FRONTEND_URL", ""), "http://localhost:5173", "http://localhost:3000"]
        origins += os.getenv("ALLOWED_ORIGINS", "").split(",")
        self.ALLOWED_ORIGINS = []
        for origin in origins:
            origin = origin.strip()
            if origin and origin not in self.ALLOWED_ORIGINS:
                self.ALLOWED_ORIGINS.append(origin)

        self.DEBUG = _as_bool(os.getenv("DEBUG", "False"))
        self.ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.LOG_FILE = os.getenv("LOG_FILE")

        # Mail: "live" needs real credentials, "sandbox" provisions an Ethereal account
        default_mode = "live" if self.ENVIRONMENT == "production" else "sandbox"
        self.MAIL_MODE = os.getenv("MAIL_MODE", default_mode).lower()
        self.EMAIL_USER = os.getenv("EMAIL_USER", "")
        self.EMAIL_PASS = os.getenv("EMAIL_PASS", "")
        self.SMTP_SERVER = os.getenv("SMTP_SERVER", "smtp.gmail.com")
        self.SMTP_PORT = int(os.getenv("SMTP_PORT", "465"))
        self.SMTP_USE_SSL = _as_bool(os.getenv("SMTP_USE_SSL", "True"))
        self.FROM_EMAIL = os.getenv("FROM_EMAIL") or self.EMAIL_USER or "noreply@portfolio.com"
        self.ADMIN_EMAIL = os.getenv("ADMIN_EMAIL") or self.EMAIL_USER or "chalabirmechu@gmail.com"
        self.OWNER_NAME = os.getenv("OWNER_NAME", "Chala Birmechu")
        self.ETHEREAL_API_URL = os.getenv("ETHEREAL_API_URL", "https://api.nodemailer.com")

        # Contact pipeline bounds
        self.PERSIST_TIMEOUT_SECONDS = float(os.getenv("PERSIST_TIMEOUT_SECONDS", "5"))
        self.SENDER_TIMEOUT_SECONDS = float(os.getenv("SENDER_TIMEOUT_SECONDS", "15"))
        self.SEND_TIMEOUT_SECONDS = float(os.getenv("SEND_TIMEOUT_SECONDS", "10"))
        self.SENDER_TTL_SECONDS = float(os.getenv("SENDER_TTL_SECONDS", "300"))
        self.NOTIFY_ON_PERSIST_FAILURE = _as_bool(os.getenv("NOTIFY_ON_PERSIST_FAILURE", "True"))

        # Rate limiting
        self.RATE_LIMIT_WINDOW_MS = int(os.getenv("RATE_LIMIT_WINDOW_MS", str(15 * 60 * 1000)))
        self.RATE_LIMIT_MAX_REQUESTS = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "100"))

        # Admin auth
        self.SECRET_KEY = os.getenv("SECRET_KEY") or os.getenv("JWT_SECRET") or "change-me-in-production"
        self.ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "120"))
        self.ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "")

settings = Settings()
