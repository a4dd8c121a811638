"""Схеми Pydantic для ідентифікації користувача."""

from typing import Optional

from pydantic import BaseModel


class ActingUser(BaseModel):
    """Дані користувача, що розшифровуються з токена та потрапляють в аудит."""
    user_id: str
    username: Optional[str] = None
    role: Optional[str] = None

    @property
    def audit_name(self) -> str:
        """Ім'я для журналу аудиту."""
        return self.username or self.user_id
