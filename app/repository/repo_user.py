import logging
from typing import Optional
from fastapi import Depends
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.db.base import get_db
from app.helpers.exception_handler import ConflictException
from app.models.model_user import User

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_login(self, login: str) -> Optional[User]:
        return self.db.query(User).filter(or_(User.username == login, User.email == login)).first()

    def get_by_id(self, user_id) -> Optional[User]:
        return self.db.query(User).filter(User.user_id == user_id).first()

    def create(self, user_data: User) -> User:
        """Insert a user. A unique constraint hit (a concurrent registration won) is a conflict."""
        self.db.add(user_data)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Duplicate user on insert: {user_data.username} ({e.orig})")
            raise ConflictException('Username or email already exists')
        self.db.refresh(user_data)
        return user_data
