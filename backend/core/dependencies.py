"""Залежності для визначення користувача, що виконує дію."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from backend.core.security import decode_token
from backend.schemas.auth import ActingUser

# Токен видає зовнішній сервіс автентифікації
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


async def get_acting_user(token: str = Depends(oauth2_scheme)) -> ActingUser:
    """
    Залежність для отримання користувача з токена.

    Args:
        token: JWT токен з заголовку Authorization

    Returns:
        Дані користувача для журналу аудиту

    Raises:
        HTTPException: Якщо токен недійсний
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token_data = decode_token(token)
    if token_data is None:
        raise credentials_exception

    user_id = token_data.get("sub")
    if user_id is None:
        raise credentials_exception

    return ActingUser(
        user_id=str(user_id),
        username=token_data.get("username"),
        role=token_data.get("role"),
    )
