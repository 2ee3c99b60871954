"""Хеширование паролей (bcrypt)."""
import bcrypt
import anyio

from store_api.config import BCRYPT_ROUNDS


def hash_password_sync(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


async def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """bcrypt намеренно медленный, поэтому считаем его в рабочем потоке, не блокируя event loop."""
    return await anyio.to_thread.run_sync(hash_password_sync, password, rounds)
