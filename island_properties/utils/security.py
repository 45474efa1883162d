import secrets
from functools import lru_cache

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(plain_password, password_hash)
    except ValueError:
        # Malformed or unknown hash format
        return False


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """Hash checked against when no account matches, so both paths cost one bcrypt verify."""
    return pwd_context.hash(secrets.token_urlsafe(16))


def normalize_email(email: str) -> str:
    """Admin emails are stored and looked up in this form only."""
    return email.strip().lower()


def generate_session_token() -> str:
    """Opaque, unguessable admin session token."""
    return secrets.token_urlsafe(32)
