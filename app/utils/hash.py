import bcrypt
from functools import lru_cache


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    # bcrypt.checkpw compares in constant time
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # unparseable stored digest
        return False


@lru_cache(maxsize=None)
def dummy_hash(rounds: int = 10) -> str:
    """Digest compared against when the account does not exist."""
    return hash_password("not-a-real-password", rounds)
