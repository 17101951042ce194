from datetime import datetime, timedelta

import pytest

from visitdesk.models.visitor import Visit, Visitor
from visitdesk.services import visits as visit_service
from visitdesk.services.errors import NotFoundError, StateConflictError


@pytest.fixture
def visitor(db):
    row = Visitor(full_name="Jean Mukendi", year_of_birth=1985, phone_number="0812345678")
    db.add(row)
    db.commit()
    return row


def _visit(db, visitor, **kwargs):
    visit = visit_service.start_visit(db, visitor, kwargs.pop("purpose", "Meeting"))
    for key, value in kwargs.items():
        setattr(visit, key, value)
    db.commit()
    return visit


def test_start_visit_increments_counter(db, visitor):
    visit_service.start_visit(db, visitor, "Meeting")
    visit_service.start_visit(db, visitor, "")
    db.commit()
    assert visitor.visit_count == 2
    purposes = sorted(v.purpose or "" for v in db.query(Visit))
    assert purposes == ["", "Meeting"]


def test_check_out_completes_visit(db, visitor):
    visit = _visit(db, visitor)
    when = datetime(2026, 3, 2, 17, 30)
    visit_service.check_out(db, visit.id, now=when)
    db.commit()

    assert visit.active is False
    assert visit.check_out_time == when


def test_check_out_twice_is_rejected_and_keeps_time(db, visitor):
    visit = _visit(db, visitor)
    first = datetime.now()
    visit_service.check_out(db, visit.id, now=first)
    db.commit()

    with pytest.raises(StateConflictError):
        visit_service.check_out(db, visit.id, now=first + timedelta(hours=1))
    assert visit.check_out_time == first


def test_check_out_unknown_visit(db):
    with pytest.raises(NotFoundError):
        visit_service.check_out(db, 12345)


def test_check_out_all_uses_one_timestamp(db, visitor):
    a = _visit(db, visitor)
    b = _visit(db, visitor)
    done = _visit(db, visitor, active=False, check_out_time=datetime(2026, 1, 1, 12, 0))
    now = datetime(2026, 1, 2, 0, 0)

    assert visit_service.check_out_all(db, now=now) == 2
    db.commit()

    assert {a.check_out_time, b.check_out_time} == {now}
    assert not a.active and not b.active
    assert done.check_out_time == datetime(2026, 1, 1, 12, 0)
    assert visit_service.check_out_all(db) == 0


def test_active_visit_lookup(db, visitor):
    assert visit_service.get_active_visit(db, visitor.id) is None
    visit = _visit(db, visitor)
    assert visit_service.get_active_visit(db, visitor.id).id == visit.id
    assert visit_service.has_active_visit(db, visitor.id)


def test_update_purpose(db, visitor):
    visit = _visit(db, visitor)
    visit_service.update_purpose(db, visit.id, "Interview")
    db.commit()
    assert db.get(Visit, visit.id).purpose == "Interview"


def test_partner_link_is_mutual(db, visitor):
    a, b = _visit(db, visitor), _visit(db, visitor)
    visit_service.set_partner(db, a.id, b.id)
    db.commit()
    assert a.partner_id == b.id
    assert b.partner_id == a.id


def test_relinking_clears_stale_reciprocal(db, visitor):
    a, b, c = _visit(db, visitor), _visit(db, visitor), _visit(db, visitor)
    visit_service.set_partner(db, a.id, b.id)
    visit_service.set_partner(db, a.id, c.id)
    db.commit()

    assert a.partner_id == c.id
    assert c.partner_id == a.id
    assert b.partner_id is None


def test_linking_a_visit_that_already_has_a_partner(db, visitor):
    a, b, c = _visit(db, visitor), _visit(db, visitor), _visit(db, visitor)
    visit_service.set_partner(db, a.id, b.id)
    # c takes b away from a
    visit_service.set_partner(db, c.id, b.id)
    db.commit()

    assert c.partner_id == b.id
    assert b.partner_id == c.id
    assert a.partner_id is None


def test_unlink(db, visitor):
    a, b = _visit(db, visitor), _visit(db, visitor)
    visit_service.set_partner(db, a.id, b.id)
    visit, partner = visit_service.set_partner(db, a.id, None)
    db.commit()

    assert partner is None
    assert a.partner_id is None
    assert b.partner_id is None


def test_self_partner_rejected(db, visitor):
    a = _visit(db, visitor)
    with pytest.raises(StateConflictError):
        visit_service.set_partner(db, a.id, a.id)


def test_unknown_partner(db, visitor):
    a = _visit(db, visitor)
    with pytest.raises(NotFoundError):
        visit_service.set_partner(db, a.id, 999)
    with pytest.raises(NotFoundError):
        visit_service.set_partner(db, 999, a.id)


def test_listings_split_active_and_history(db, visitor):
    active = _visit(db, visitor)
    done = _visit(db, visitor, active=False, check_out_time=datetime.now())

    current = visit_service.list_active_with_visitors(db)
    history = visit_service.list_history_with_visitors(db)

    assert [v.id for v, _ in current] == [active.id]
    assert [v.id for v, _ in history] == [done.id]
    assert history[0][1].id == visitor.id
