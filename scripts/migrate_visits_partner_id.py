"""
Add partner_id column to visits table (mutual partner link between two visits).
For a NEW database: not needed; visitdesk.models.visitor.Visit already defines it (create_all creates it).
Run once on an EXISTING DB: python scripts/migrate_visits_partner_id.py (from project root)
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from sqlalchemy import text, inspect
from visitdesk.database import engine


def main():
    insp = inspect(engine)
    existing = {c["name"] for c in insp.get_columns("visits")}
    with engine.begin() as conn:
        if "partner_id" not in existing:
            conn.execute(text('ALTER TABLE visits ADD COLUMN "partner_id" INTEGER REFERENCES visits(id) ON DELETE SET NULL'))
            print("  added: visits.partner_id")
        else:
            print("  skip (exists): visits.partner_id")
    print("Done.")


if __name__ == "__main__":
    main()
