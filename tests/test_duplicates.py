import pytest

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.models.enums import UserRole
from backend.app.models.lead import Lead
from backend.app.models.owner import Owner
from backend.app.models.user import User
from backend.app.services import duplicates
from backend.app.services.outcome import INVALID


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def creator(db):
    user = User(full_name="Marketer", email="mkt@example.com", role=UserRole.MARKETING)
    db.add(user)
    db.commit()
    return user


def add_lead(db, creator, name: str, phone: str) -> Lead:
    lead = Lead(client_name=name, client_phone=phone, created_by_id=creator.id)
    db.add(lead)
    db.commit()
    return lead


def test_duplicate_found_across_phone_formats(db, creator):
    lead = add_lead(db, creator, "Mona", "+20 100 123 4567")

    match = duplicates.find_duplicate_lead(db, "01001234567")

    assert match is not None and match.id == lead.id


def test_duplicate_lookup_can_exclude_self(db, creator):
    lead = add_lead(db, creator, "Mona", "01001234567")
    assert duplicates.find_duplicate_lead(db, "01001234567", exclude_id=lead.id) is None


def test_blank_phone_never_matches(db, creator):
    add_lead(db, creator, "Mona", "01001234567")
    assert duplicates.find_duplicate_lead(db, "") is None
    assert duplicates.find_duplicate_lead(db, "---") is None


def test_search_client_prefers_phone_then_name(db, creator):
    first = add_lead(db, creator, "Ahmed Ali", "01001234567")
    add_lead(db, creator, "Ahmed Samir", "01119876543")

    by_phone = duplicates.search_client(db, "201119876543")
    assert by_phone.found and by_phone.search_type == "phone"
    assert by_phone.name == "Ahmed Samir"

    by_name = duplicates.search_client(db, "ahmed")
    assert by_name.found and by_name.search_type == "name"
    assert by_name.id == first.id


def test_search_client_not_found(db, creator):
    result = duplicates.search_client(db, "nobody")
    assert not result.found
    assert result.as_dict()["found"] is False


def test_search_owner_by_phone_and_name(db):
    owner = Owner(name="Hany Owner", phone="0122 333 4444", email="hany@example.com")
    db.add(owner)
    db.commit()

    by_phone = duplicates.search_owner(db, "+201223334444")
    assert by_phone.found and by_phone.id == owner.id
    assert by_phone.email == "hany@example.com"

    by_name = duplicates.search_owner(db, "HANY")
    assert by_name.found and by_name.search_type == "name"


def test_add_owner_requires_name(db):
    outcome = duplicates.add_owner(db, "  ", "0100", None)
    assert outcome.code == INVALID
    assert db.query(Owner).count() == 0


def test_add_owner_returns_id(db):
    outcome = duplicates.add_owner(db, " Nadia ", "01005556666", None)
    assert outcome.ok
    owner = db.get(Owner, outcome.data["owner_id"])
    assert owner.name == "Nadia"
