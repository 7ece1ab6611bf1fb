# taskboard/schemas/tokens.py
from typing import Optional

from taskboard.schemas.base import APIModel
from taskboard.schemas.user import UserOut


class AuthData(UserOut):
    token: str


class AuthResponse(APIModel):
    success: bool = True
    message: Optional[str] = None
    data: AuthData
