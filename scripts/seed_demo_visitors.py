"""
Fill the database with random demo visitors and visits.

Run from project root:
  python scripts/seed_demo_visitors.py [count]
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from visitdesk.database import Base, SessionLocal, engine
from visitdesk.models import Visitor  # noqa: F401
from visitdesk.seed import seed_demo_visitors


def main():
    count = int(sys.argv[1]) if len(sys.argv) > 1 else 50
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_demo_visitors(db, count)
        print(f"Seeded {count} demo visitors.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
