from __future__ import annotations

import pytest

from app.core.errors import Conflict, Unauthenticated
from app.services import auth_service
from app.store import MemoryStore


def test_hash_is_salted_and_verifiable() -> None:
    a = auth_service.hash_password("secret", iterations=1000)
    b = auth_service.hash_password("secret", iterations=1000)
    assert a != b
    assert a.startswith("pbkdf2_sha256$1000$")
    assert auth_service.verify_password("secret", a)
    assert not auth_service.verify_password("Secret", a)


def test_verify_rejects_malformed_hashes() -> None:
    assert not auth_service.verify_password("x", "plaintext")
    assert not auth_service.verify_password("x", "md5$1$salt$abc")


def test_register_then_login() -> None:
    store = MemoryStore()
    user = auth_service.register(store, "mira", "pw", email="m@x.io")
    assert user.password_hash != "pw"
    assert auth_service.login(store, "mira", "pw").id == user.id


def test_register_duplicate() -> None:
    store = MemoryStore()
    auth_service.register(store, "mira", "pw")
    with pytest.raises(Conflict) as exc:
        auth_service.register(store, "mira", "other")
    assert exc.value.status_code == 400
    assert exc.value.message == "Username already exists"


def test_login_failures() -> None:
    store = MemoryStore()
    auth_service.register(store, "mira", "pw")
    with pytest.raises(Unauthenticated):
        auth_service.login(store, "mira", "nope")
    with pytest.raises(Unauthenticated):
        auth_service.login(store, "nobody", "pw")
