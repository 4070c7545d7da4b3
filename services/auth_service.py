# services/auth_service.py
import hashlib
import hmac
import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.models.user_model import User, UserRole
from services.errors import AuthenticationError, ConflictError
from utils.sanitization import hash_email

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
PBKDF2_ITERATIONS = 260_000


# ------------------------------------------------------------
# PASSWORDS
# ------------------------------------------------------------
def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), PBKDF2_ITERATIONS)
    return f"pbkdf2_sha256${PBKDF2_ITERATIONS}${salt}${digest.hex()}"


def verify_password(password: str, stored: Optional[str]) -> bool:
    if not stored:
        return False
    try:
        _, iterations, salt, expected = stored.split("$")
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), int(iterations))
    return hmac.compare_digest(digest.hex(), expected)


# ------------------------------------------------------------
# TOKENS
# ------------------------------------------------------------
def create_access_token(user: User, secret: str, expire_days: int) -> str:
    expire = datetime.now(timezone.utc) + timedelta(days=expire_days)
    to_encode = {
        "sub": user.id,
        "role": user.role.value if hasattr(user.role, "value") else user.role,
        "exp": expire,
    }
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def decode_access_token(token: str, secret: str) -> str:
    """Returns the user id carried by a valid token."""
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError as e:
        raise AuthenticationError("Could not validate credentials") from e

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Could not validate credentials")
    return user_id


# ------------------------------------------------------------
# ACCOUNTS
# ------------------------------------------------------------
def _find_by_email(db: Session, email: str) -> Optional[User]:
    return db.scalar(select(User).where(User.email == email))


def signup(db: Session, name: str, email: str, password: str) -> User:
    email = email.lower().strip()
    if _find_by_email(db, email) is not None:
        raise ConflictError("User already exists")

    user = User(
        id=str(uuid.uuid4()),
        name=name.strip(),
        email=email,
        password_hash=hash_password(password),
        role=UserRole.USER,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("User already exists") from e

    db.refresh(user)
    logger.info(f"USER_SIGNUP user_id={user.id}")
    return user


def login(db: Session, email: str, password: str) -> User:
    email = email.lower().strip()
    logger.info(f"Attempting login for: {hash_email(email)}")

    user = _find_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid email or password")

    logger.info(f"USER_LOGIN user_id={user.id}")
    return user


def google_login(db: Session, email: str, name: str, google_id: Optional[str], avatar: Optional[str]) -> User:
    """
    Finds or provisions a user from a Google profile.
    The profile is trusted as sent; ID-token verification is not performed.
    """
    email = email.lower().strip()
    user = _find_by_email(db, email)

    if user is not None:
        if not user.google_id:
            user.google_id = google_id
            user.avatar = avatar or user.avatar
            db.commit()
            db.refresh(user)
        return user

    user = User(
        id=str(uuid.uuid4()),
        name=(name or email.split("@")[0]).strip(),
        email=email,
        google_id=google_id,
        avatar=avatar or "",
        role=UserRole.USER,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # Concurrent first login for the same address
        return _find_by_email(db, email)

    db.refresh(user)
    logger.info(f"Created new user via Google: {user.id}")
    return user


def auth_payload(user: User, token: str) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value if hasattr(user.role, "value") else user.role,
        "avatar": user.avatar or "",
        "token": token,
    }
