from passlib.context import CryptContext
from coursehub.core.config import settings

# CryptContext handles password hashing using bcrypt
# The salt and work factor are embedded in every hash it produces
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash using constant-time comparison"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Stored value is not a hash passlib recognizes
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    # Same password produces different hashes because of the random salt
    return pwd_context.hash(password)
