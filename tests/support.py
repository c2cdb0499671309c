"""Shared helpers for tests: fresh schema per test and session tokens for any identity."""

from fastapi.testclient import TestClient

from acquisitions.core.database import SessionLocal, engine
from acquisitions.core.security import create_access_token, hash_password
from acquisitions.models import Base, User


def reset_database() -> None:
    """Drop and recreate every table on the shared in-memory engine."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


def insert_user(
    name: str = "Ann",
    email: str = "ann@x.com",
    password: str = "secret12",
    role: str = "user",
) -> int:
    """Insert a user directly and return its id."""
    db = SessionLocal()
    try:
        user = User(name=name, email=email, password=hash_password(password), role=role)
        db.add(user)
        db.commit()
        return user.id
    finally:
        db.close()


def login_as(client: TestClient, user_id: int, role: str = "user", email: str | None = None) -> str:
    """Replace the client's session cookie with a token for the given identity."""
    token = create_access_token(
        {"id": user_id, "email": email or f"user{user_id}@x.com", "role": role}
    )
    client.cookies.clear()
    client.cookies.set("token", token)
    return token
