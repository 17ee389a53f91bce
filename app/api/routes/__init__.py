# app/api/routes/__init__.py
from . import admin, auth, contact, portfolio

__all__ = ["admin", "auth", "contact", "portfolio"]
