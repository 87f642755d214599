from passlib.context import CryptContext
from passlib.exc import UnknownHashError

# 🔐 User passwords are stored as Argon2 hashes
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (UnknownHashError, ValueError):
        # Unrecognised hash format -> treat as verification failure
        return False
