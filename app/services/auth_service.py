import hashlib
import hmac
import logging
import secrets
from typing import Optional

from app.core.errors import Conflict, Unauthenticated
from app.models import User
from app.models.series import new_id
from app.store.base import CatalogStore

logger = logging.getLogger(__name__)

ALGORITHM = "pbkdf2_sha256"
ITERATIONS = 260_000


def hash_password(password: str, salt: Optional[str] = None, iterations: int = ITERATIONS) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations)
    return f"{ALGORITHM}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        algorithm, iterations, salt, _ = stored.split("$", 3)
    except ValueError:
        return False
    if algorithm != ALGORITHM:
        return False
    candidate = hash_password(password, salt=salt, iterations=int(iterations))
    return hmac.compare_digest(candidate, stored)


def create_user(
    store: CatalogStore,
    username: str,
    password: str,
    email: Optional[str] = None,
    user_id: Optional[str] = None,
    is_admin: bool = False,
) -> User:
    user = User(
        id=user_id or new_id(),
        username=username,
        password_hash=hash_password(password),
        email=email,
        is_admin=is_admin,
    )
    return store.create_user(user)


def register(store: CatalogStore, username: str, password: str, email: Optional[str] = None) -> User:
    if store.get_user_by_username(username):
        raise Conflict("Username already exists")
    user = create_user(store, username, password, email=email)
    logger.info("Registered user %s", username)
    return user


def login(store: CatalogStore, username: str, password: str) -> User:
    user = store.get_user_by_username(username)
    if not user or not verify_password(password, user.password_hash):
        raise Unauthenticated("Invalid credentials")
    return user
