"""
Create a dashboard account if it does not exist yet (e.g. a second operator, or
after changing ADMIN_EMAIL). Existing accounts are left untouched.

Run from project root:
  python scripts/create_admin.py <email> <password>
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.database import Base, SessionLocal, engine
from app.models import Account  # noqa: F401
from app.services.auth import seed_admin


def main():
    if len(sys.argv) != 3:
        print("Usage: python scripts/create_admin.py <email> <password>")
        sys.exit(1)
    email, password = sys.argv[1].strip(), sys.argv[2]

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if seed_admin(db, email, password):
            print(f"Created account: {email}")
        else:
            print(f"Account already exists: {email}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
