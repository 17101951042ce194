"""
Create (or reset the password of) an admin account for the dashboard.

Run from project root:
  python scripts/create_admin.py <username> <password>

Without arguments, ensures the default admin from DEFAULT_ADMIN_USERNAME / DEFAULT_ADMIN_PASSWORD exists.
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from visitdesk.database import Base, SessionLocal, engine
from visitdesk.models.admin import Admin
from visitdesk.services.auth import ensure_default_admin, get_password_hash


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if len(sys.argv) < 3:
            admin = ensure_default_admin(db)
            print(f"Default admin ready: {admin.username}")
            return
        username, password = sys.argv[1].strip(), sys.argv[2]
        admin = db.query(Admin).filter(Admin.username == username).first()
        if admin:
            admin.hashed_password = get_password_hash(password)
            print(f"Password reset for admin: {username}")
        else:
            admin = Admin(username=username, hashed_password=get_password_hash(password))
            db.add(admin)
            print(f"Created admin: {username}")
        db.commit()
    finally:
        db.close()


if __name__ == "__main__":
    main()
