import pytest
from fastapi.testclient import TestClient

from backend.app.core.security import get_password_hash
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


def create_user(email: str, password: str | None, role: UserRole = UserRole.SALES, is_active: bool = True) -> int:
    with SessionLocal() as db:
        user = User(
            full_name=email.split("@")[0],
            email=email,
            hashed_password=get_password_hash(password) if password else None,
            role=role,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        return user.id


def test_successful_login_returns_token_and_role():
    client = TestClient(app)
    create_user("login@example.com", "secret", UserRole.MARKETING)
    response = client.post("/auth/login", json={"email": "login@example.com", "password": "secret"})
    assert response.status_code == 200
    data = response.json()
    assert data.get("token_type") == "bearer"
    assert data.get("role") == "Marketing"
    assert isinstance(data.get("access_token"), str) and data["access_token"]


def test_wrong_password_returns_400():
    client = TestClient(app)
    create_user("wrongpw@example.com", "secret")
    response = client.post("/auth/login", json={"email": "wrongpw@example.com", "password": "bad"})
    assert response.status_code == 400


def test_missing_hash_returns_400_not_500():
    client = TestClient(app)
    create_user("nohash@example.com", None)
    response = client.post("/auth/login", json={"email": "nohash@example.com", "password": "secret"})
    assert response.status_code == 400


def test_inactive_user_cannot_login():
    client = TestClient(app)
    create_user("inactive@example.com", "secret", is_active=False)
    response = client.post("/auth/login", json={"email": "inactive@example.com", "password": "secret"})
    assert response.status_code == 400


def test_me_returns_current_user():
    client = TestClient(app)
    create_user("me@example.com", "secret")
    token = client.post("/auth/login", json={"email": "me@example.com", "password": "secret"}).json()["access_token"]
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "me@example.com"
    assert response.json()["role"] == "Sales"


def test_me_requires_bearer_token():
    client = TestClient(app)
    assert client.get("/auth/me").status_code == 401
    assert client.get("/auth/me", headers={"Authorization": "Bearer nope"}).status_code == 401


def test_login_email_is_case_insensitive_and_returns_identity():
    client = TestClient(app)
    user_id = create_user("mixed@example.com", "secret", UserRole.ADMIN)
    response = client.post("/auth/login", json={"email": "Mixed@Example.com", "password": "secret"})
    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == user_id
    assert data["full_name"] == "mixed"
    assert data["role"] == "Admin"


def test_unknown_email_and_wrong_password_share_message():
    client = TestClient(app)
    create_user("known@example.com", "secret")
    unknown = client.post("/auth/login", json={"email": "ghost@example.com", "password": "secret"})
    wrong = client.post("/auth/login", json={"email": "known@example.com", "password": "bad"})
    assert unknown.status_code == wrong.status_code == 400
    assert unknown.json()["detail"] == wrong.json()["detail"] == "Invalid email or password"
