# taskboard/services/auth_service.py
import logging
from typing import Optional, Tuple

from email_validator import EmailNotValidError, validate_email
from jose import JWTError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from taskboard.models.user import User
from taskboard.utils.errors import (
    DuplicateEmail,
    InvalidCredentials,
    NotFound,
    Unauthenticated,
    ValidationError,
)
from taskboard.utils.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class AuthService:
    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(data={"sub": str(user.id)})

    @staticmethod
    def register(
        db: Session,
        email: Optional[str],
        password: Optional[str],
        username: Optional[str],
    ) -> Tuple[User, str]:
        """Create a user with a hashed password and return it with a fresh token"""
        if _is_blank(email) or _is_blank(password) or _is_blank(username):
            raise ValidationError("Please provide email, password and username")

        email = normalize_email(email)
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            raise ValidationError("Please provide a valid email")

        if db.query(User).filter(User.email == email).first():
            raise DuplicateEmail("User already exists")

        user = User(
            email=email,
            hashed_password=hash_password(password),
            username=username.strip(),
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            db.rollback()
            raise DuplicateEmail("User already exists")
        db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user, AuthService.issue_token(user)

    @staticmethod
    def login(db: Session, email: Optional[str], password: Optional[str]) -> Tuple[User, str]:
        if _is_blank(email) or _is_blank(password):
            raise ValidationError("Please provide email and password")

        user = db.query(User).filter(User.email == normalize_email(email)).first()
        # Unknown email and wrong password are reported identically
        if not user or not verify_password(password, user.hashed_password):
            logger.warning("Failed login attempt")
            raise InvalidCredentials("Invalid credentials")

        logger.info(f"User {user.id} logged in")
        return user, AuthService.issue_token(user)

    @staticmethod
    def verify_token(token: Optional[str]) -> int:
        """Return the user id embedded in a valid, unexpired token"""
        if not token:
            raise Unauthenticated("Not authorized, no token")
        try:
            payload = decode_access_token(token)
            user_id = int(payload.get("sub"))
        except (JWTError, TypeError, ValueError):
            logger.warning("Rejected bearer token")
            raise Unauthenticated("Not authorized, token failed")
        return user_id

    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if user is None:
            # Token outlived its user
            raise Unauthenticated("Not authorized, user not found")
        return user

    @staticmethod
    def delete_user(db: Session, user_id: int) -> None:
        """Remove a user together with all of their tasks"""
        user = db.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        db.delete(user)
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
        logger.info(f"Deleted user {user_id} and their tasks")
