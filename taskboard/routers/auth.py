import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.database import get_db
from taskboard.models.user import User
from taskboard.schemas import ErrorResponse
from taskboard.schemas.tokens import AuthData, AuthResponse
from taskboard.schemas.user import UserLogin, UserOut, UserRegister, UserResponse
from taskboard.services.auth_service import AuthService
from taskboard.utils.auth import get_current_user
from taskboard.utils.errors import InternalError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/auth",
    tags=["Authentication"],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)


def _auth_payload(user: User, token: str) -> AuthData:
    return AuthData(**UserOut.model_validate(user).model_dump(), token=token)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user: UserRegister, db: Session = Depends(get_db)):
    try:
        new_user, token = AuthService.register(db, user.email, user.password, user.username)
    except SQLAlchemyError as e:
        logger.exception("Error in register")
        raise InternalError("Server error during registration", detail=str(e))

    return {
        "success": True,
        "message": "User registered successfully",
        "data": _auth_payload(new_user, token),
    }


@router.post("/login", response_model=AuthResponse)
def login(user: UserLogin, db: Session = Depends(get_db)):
    try:
        db_user, token = AuthService.login(db, user.email, user.password)
    except SQLAlchemyError as e:
        logger.exception("Error in login")
        raise InternalError("Server error during login", detail=str(e))

    return {
        "success": True,
        "message": "Login successful",
        "data": _auth_payload(db_user, token),
    }


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """Profile of the user the bearer token belongs to"""
    return {"success": True, "data": current_user}
