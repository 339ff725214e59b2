import jwt
import logging
import uuid
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import ValidationError

from app.models.model_user import User
from app.core.security import verify_password, get_password_hash, decode_access_token
from app.schemas.sche_token import TokenPayload
from app.schemas.sche_user import UserRegisterRequest
from app.repository.repo_user import UserRepository
from app.helpers.exception_handler import ConflictException, NotFoundException, UnauthenticatedException

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, user_repo: UserRepository = Depends()):
        self.user_repo = user_repo

    def authenticate(self, *, login: str, password: str) -> Optional[User]:
        user = self.user_repo.get_by_login(login)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def resolve_identity(self, credentials: Optional[HTTPAuthorizationCredentials]) -> User:
        """Map a bearer token to its user, or fail as 'not logged in'."""
        if credentials is None:
            raise UnauthenticatedException()
        try:
            payload = decode_access_token(credentials.credentials)
            token_data = TokenPayload(**payload)
            user_id = uuid.UUID(token_data.user_id or "")
        except (jwt.PyJWTError, ValidationError, ValueError) as e:
            logger.info(f"Credential validation failed: {e}")
            raise UnauthenticatedException(message="Could not validate credentials")

        user = self.user_repo.get_by_id(user_id)
        if not user:
            logger.warning(f"User not found: {token_data.user_id}")
            raise NotFoundException(message="User not found")
        if not user.is_active:
            raise UnauthenticatedException(message="Inactive user")
        return user

    def register_user(self, data: UserRegisterRequest) -> User:
        if self.user_repo.get_by_username(data.username):
            raise ConflictException('Username already exists')

        if self.user_repo.get_by_email(data.email):
            raise ConflictException('Email already exists')

        new_user = User(
            username=data.username,
            email=data.email,
            hashed_password=get_password_hash(data.password),
            is_active=True,
        )
        created_user = self.user_repo.create(new_user)
        logger.info(f"User registered: {created_user.username}")
        return created_user
