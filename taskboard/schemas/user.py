from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from taskboard.schemas.base import APIModel


class UserRegister(BaseModel):
    # Presence and format are checked by AuthService so the error envelope is uniform
    email: Optional[str] = None
    password: Optional[str] = None
    username: Optional[str] = None


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(APIModel):
    id: int
    email: str
    username: str
    created_at: datetime


class UserResponse(APIModel):
    success: bool = True
    data: UserOut
