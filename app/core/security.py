import jwt
import bcrypt
from typing import Any, Union
from app.core.config import settings
from datetime import datetime, timedelta, timezone

def create_access_token(user_id: Union[int, Any]) -> str:
    expire = datetime.now(timezone.utc) + timedelta(
        seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS
    )
    to_encode = {
        "exp": expire, "user_id": str(user_id)
    }
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.SECURITY_ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> dict:
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.SECURITY_ALGORITHM])


def verify_password(plain_password: str, hashed_password: str) -> bool:
    password = plain_password.encode('utf-8')
    # no stored hash can come from more than 72 bytes
    if len(password) > 72:
        return False
    return bcrypt.checkpw(password, hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')
