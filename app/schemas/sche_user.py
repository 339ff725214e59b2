from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# bcrypt only looks at the first 72 bytes of the encoded password
MAX_PASSWORD_BYTES = 72


class UserItemResponse(BaseModel):
    user_id: UUID
    username: str
    email: EmailStr
    avatar: str = Field(validation_alias='avatar_url')

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class UserRegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=MAX_PASSWORD_BYTES)

    @field_validator('password')
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode('utf-8')) > MAX_PASSWORD_BYTES:
            raise ValueError(f'password must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded')
        return value


class LoginRequest(BaseModel):
    login: str = Field(..., description="Username or email")
    password: str
