from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

from app.models.model_user import User
from app.services.srv_user import UserService

reusable_oauth2 = HTTPBearer(
    scheme_name='Authorization',
    auto_error=False
)


def login_required(
    http_authorization_credentials: Optional[HTTPAuthorizationCredentials] = Depends(reusable_oauth2),
    user_service: UserService = Depends()
) -> User:
    """Resolve the caller to a user or fail with a 'not logged in' error."""
    return user_service.resolve_identity(http_authorization_credentials)
