# app/models/__init__.py
from .admin import Admin
from .contact import ContactMessage

__all__ = ["Admin", "ContactMessage"]
