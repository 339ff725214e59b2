from sqlalchemy import Column, String, DateTime, func, Boolean, Uuid
from app.models.model_base import Base
import uuid

class User(Base):
    __tablename__ = "users"

    user_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(100), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    avatar = Column(String(500))
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=func.now())

    @property
    def avatar_url(self) -> str:
        return self.avatar or f"https://ui-avatars.com/api/?name={self.username}&background=random"
