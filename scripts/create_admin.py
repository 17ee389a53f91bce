"""
Create an admin account, or reset the password of an existing one.

    python scripts/create_admin.py admin@example.com
"""

import argparse
import getpass
import os
import sys

# Add parent directory to path to allow importing app
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.auth import get_password_hash
from app.core.database import SessionLocal, create_tables
from app.models.admin import Admin


def create_admin(email: str, password: str) -> bool:
    """Return True when a new admin was created, False when an existing one was updated."""
    create_tables()
    db = SessionLocal()
    try:
        admin = db.query(Admin).filter(Admin.email == email).first()
        created = admin is None
        if created:
            admin = Admin(email=email, hashed_password=get_password_hash(password))
            db.add(admin)
        else:
            admin.hashed_password = get_password_hash(password)
        db.commit()
        return created
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Create or reset a portfolio admin account")
    parser.add_argument("email", help="admin email address")
    parser.add_argument("--password", help="password (prompted when omitted)")
    args = parser.parse_args()

    email = args.email.strip().lower()
    password = args.password or getpass.getpass("Password: ")
    if len(password) < 8:
        parser.error("password must be at least 8 characters")

    if create_admin(email, password):
        print(f"✅ Admin {email} created.")
    else:
        print(f"✅ Password updated for admin {email}.")


if __name__ == "__main__":
    main()
