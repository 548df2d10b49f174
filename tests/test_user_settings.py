import pytest
from fastapi.testclient import TestClient

from backend.app.core.security import create_access_token, get_password_hash, verify_password
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.main import app
from backend.app.models.enums import UserRole
from backend.app.models.user import User


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def create_user(email: str, password: str = "secret1", role: UserRole = UserRole.SALES) -> int:
    with SessionLocal() as db:
        user = User(
            full_name=email.split("@")[0],
            email=email,
            hashed_password=get_password_hash(password),
            role=role,
        )
        db.add(user)
        db.commit()
        return user.id


def auth(user_id: int) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id=user_id)}"}


def load_user(user_id: int) -> User:
    with SessionLocal() as db:
        return db.get(User, user_id)


def test_get_settings_splits_email():
    client = TestClient(app)
    user_id = create_user("sara@estate-example.com")
    resp = client.get("/settings/", headers=auth(user_id))
    assert resp.status_code == 200
    data = resp.json()
    assert data["username"] == "sara"
    assert data["domain"] == "@estate-example.com"
    assert data["role"] == "Sales"


def test_settings_require_authentication():
    client = TestClient(app)
    assert client.get("/settings/").status_code == 401


def test_update_full_name_trims_and_validates():
    client = TestClient(app)
    user_id = create_user("sara@estate-example.com")

    resp = client.put("/settings/profile", json={"full_name": "  Sara Adel  "}, headers=auth(user_id))
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "Profile updated successfully"}
    assert load_user(user_id).full_name == "Sara Adel"

    assert client.put("/settings/profile", json={"full_name": "   "}, headers=auth(user_id)).status_code == 400
    too_long = client.put("/settings/profile", json={"full_name": "x" * 26}, headers=auth(user_id))
    assert too_long.status_code == 400
    assert load_user(user_id).full_name == "Sara Adel"


def test_update_email_username_keeps_domain():
    client = TestClient(app)
    user_id = create_user("sara@estate-example.com")

    resp = client.put("/settings/email", json={"username": "  Sara.Adel "}, headers=auth(user_id))
    assert resp.status_code == 200
    assert load_user(user_id).email == "sara.adel@estate-example.com"

    bad = client.put("/settings/email", json={"username": "sara@other.com"}, headers=auth(user_id))
    assert bad.status_code == 400
    assert load_user(user_id).email == "sara.adel@estate-example.com"


def test_update_email_username_rejects_taken_email():
    client = TestClient(app)
    create_user("omar@estate-example.com")
    user_id = create_user("sara@estate-example.com")

    resp = client.put("/settings/email", json={"username": "omar"}, headers=auth(user_id))
    assert resp.status_code == 409
    assert resp.json()["detail"] == "This email is already in use"
    assert load_user(user_id).email == "sara@estate-example.com"


def test_update_password_requires_current_password():
    client = TestClient(app)
    user_id = create_user("sara@estate-example.com", password="secret1")

    wrong = client.put(
        "/settings/password",
        json={"current_password": "nope", "new_password": "better-secret"},
        headers=auth(user_id),
    )
    assert wrong.status_code == 400
    assert wrong.json()["detail"] == "Current password is incorrect"

    short = client.put(
        "/settings/password",
        json={"current_password": "secret1", "new_password": "abc"},
        headers=auth(user_id),
    )
    assert short.status_code == 400
    assert verify_password("secret1", load_user(user_id).hashed_password)

    ok = client.put(
        "/settings/password",
        json={"current_password": "secret1", "new_password": "better-secret"},
        headers=auth(user_id),
    )
    assert ok.status_code == 200
    assert verify_password("better-secret", load_user(user_id).hashed_password)

    login = client.post("/auth/login", json={"email": "sara@estate-example.com", "password": "better-secret"})
    assert login.status_code == 200
