from fastapi import Request
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

from app.schemas.sche_base import ResponseSchemaBase


class CustomException(Exception):
    http_code: int
    code: str
    message: str

    def __init__(self, http_code: int = None, code: str = None, message: str = None):
        self.http_code = http_code if http_code else 500
        self.code = code if code else str(self.http_code)
        self.message = message
        super().__init__(message)


class ValidationException(CustomException):
    def __init__(self, message: str = 'Invalid request'):
        super().__init__(http_code=400, code='400', message=message)


class UnauthenticatedException(CustomException):
    def __init__(self, message: str = 'Not logged in'):
        super().__init__(http_code=401, code='401', message=message)


class NotFoundException(CustomException):
    def __init__(self, message: str = 'Not found'):
        super().__init__(http_code=404, code='404', message=message)


class ConflictException(CustomException):
    def __init__(self, message: str = 'Conflict'):
        super().__init__(http_code=409, code='409', message=message)


class StoreUnavailableException(CustomException):
    """Persistence failed; nothing was committed and the caller may retry."""

    def __init__(self, message: str = 'Storage temporarily unavailable, please retry'):
        super().__init__(http_code=503, code='503', message=message)


async def http_exception_handler(request: Request, exc: CustomException):
    return JSONResponse(
        status_code=exc.http_code,
        content=jsonable_encoder(ResponseSchemaBase().custom_response(False, exc.message, exc.code))
    )
