# taskboard/utils/auth.py
from typing import Optional

from fastapi import Depends, Request
from fastapi.responses import JSONResponse
from fastapi.security import OAuth2PasswordBearer
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session

from taskboard.database import get_db
from taskboard.models.user import User
from taskboard.services.auth_service import AuthService
from taskboard.utils.errors import Unauthenticated, error_body

TASKS_PREFIX = "/api/tasks"

# auto_error is off so a missing header goes through the same 401 envelope as a bad token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_current_user_id(token: Optional[str] = Depends(oauth2_scheme)) -> int:
    return AuthService.verify_token(token)


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> User:
    return AuthService.get_user(db, user_id)


async def require_bearer_token(request: Request, call_next):
    """Reject task requests without a valid token before the body is parsed"""
    if request.url.path.startswith(TASKS_PREFIX) and request.method != "OPTIONS":
        scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
        try:
            AuthService.verify_token(token if scheme.lower() == "bearer" else None)
        except Unauthenticated as e:
            return JSONResponse(
                status_code=e.status_code,
                content=error_body(e.message),
                headers={"WWW-Authenticate": "Bearer"},
            )
    return await call_next(request)
