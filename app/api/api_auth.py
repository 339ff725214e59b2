from typing import Any

from fastapi import APIRouter, Depends

from app.core.security import create_access_token
from app.helpers.exception_handler import CustomException
from app.schemas.sche_base import DataResponse
from app.schemas.sche_token import Token
from app.schemas.sche_user import LoginRequest, UserItemResponse, UserRegisterRequest
from app.services.srv_user import UserService

router = APIRouter()


@router.post('/login', response_model=DataResponse[Token])
def login_access_token(form_data: LoginRequest, user_service: UserService = Depends()):
    user = user_service.authenticate(login=form_data.login, password=form_data.password)
    if not user:
        raise CustomException(http_code=400, code='400', message='Incorrect username/email or password')
    elif not user.is_active:
        raise CustomException(http_code=401, code='401', message='Inactive user')

    return DataResponse().success_response(Token(
        access_token=create_access_token(user_id=str(user.user_id))
    ))


@router.post('/register', response_model=DataResponse[UserItemResponse])
def register(register_data: UserRegisterRequest, user_service: UserService = Depends()) -> Any:
    register_user = user_service.register_user(register_data)
    return DataResponse().success_response(data=UserItemResponse.model_validate(register_user))
