"""Утиліти для роботи з JWT токенами."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from backend.core.config import get_settings

settings = get_settings()

DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Створює JWT access token.

    Видача токенів належить сервісу автентифікації; функція потрібна
    для службових скриптів та тестів.
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or DEFAULT_TOKEN_LIFETIME)
    to_encode.update({"exp": expire})
    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.algorithm
    )


def decode_token(token: str) -> Optional[dict]:
    """
    Декодує JWT токен.

    Returns:
        Payload токена або None, якщо токен недійсний чи прострочений
    """
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm]
        )
    except JWTError:
        return None
