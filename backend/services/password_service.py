"""
Password hashing helpers backed by passlib.
"""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class PasswordService:
    """bcrypt hashing and verification."""

    @staticmethod
    def hash(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def verify(password: str, hashed: str) -> bool:
        if not hashed:
            return False
        return pwd_context.verify(password, hashed)
