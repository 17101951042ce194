"""Demo data: random visitors with a mix of completed and active visits."""
import random
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from visitdesk.models.visitor import Visitor, Visit, Sex

FIRST_NAMES = [
    "Jean", "Marie", "Patrick", "Grace", "Joseph", "Esther", "David", "Ruth",
    "Emmanuel", "Sarah", "Daniel", "Rachel", "Samuel", "Naomi", "Pierre", "Christelle",
]
LAST_NAMES = [
    "Mukendi", "Kabongo", "Tshibangu", "Ilunga", "Mbuyi", "Kalala", "Lukusa", "Ngoy",
    "Mutombo", "Kasongo", "Mwamba", "Banza",
]
MUNICIPALITIES = ["Bandalungwa", "Barumbu", "Gombe", "Kalamu", "Kintambo", "Lemba", "Limete", "Ngaliema"]
PURPOSES = ["Meeting", "Delivery", "Interview", "Site visit", "Conference", "Maintenance", "Personal visit", "Other"]
EMAIL_DOMAINS = ["gmail.com", "yahoo.fr", "outlook.com"]


def _random_phone(rng: random.Random) -> str:
    return "0" + rng.choice("89") + "".join(rng.choice("0123456789") for _ in range(8))


def seed_demo_visitors(db: Session, count: int = 50, seed: int | None = None) -> int:
    """Create `count` visitors, each with 1-4 visits over the last 30 days. Returns visitors created."""
    rng = random.Random(seed)
    now = datetime.now()
    for _ in range(count):
        first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
        # 20% of visitors leave no email
        email = None
        if rng.random() >= 0.2:
            email = f"{first}.{last}{rng.randint(1, 99)}@{rng.choice(EMAIL_DOMAINS)}".lower()
        visitor = Visitor(
            full_name=f"{first} {last}",
            year_of_birth=rng.randint(1950, 2005),
            sex=rng.choice(list(Sex)),
            municipality=rng.choice(MUNICIPALITIES),
            email=email,
            phone_number=_random_phone(rng),
            verified=rng.random() < 0.3,
        )
        db.add(visitor)
        db.flush()

        n_visits = rng.randint(1, 4)
        for i in range(n_visits):
            check_in = now - timedelta(days=rng.randint(0, 30), hours=rng.randint(0, 8), minutes=rng.randint(0, 59))
            # The latest visit of about one visitor in ten is still open
            still_here = i == n_visits - 1 and rng.random() < 0.1
            db.add(Visit(
                visitor_id=visitor.id,
                purpose=rng.choice(PURPOSES),
                check_in_time=check_in,
                check_out_time=None if still_here else check_in + timedelta(minutes=rng.randint(10, 240)),
                active=still_here,
            ))
        visitor.visit_count = n_visits
    db.commit()
    return count
