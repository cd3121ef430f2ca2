from fastapi import status

from src.app.errors import (
    AccountDisabledError,
    ApplicationError,
    AuthenticationRequiredError,
    ConflictError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    PasswordPolicyError,
    ValidationError,
)

CLIENT_ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidTokenError: status.HTTP_400_BAD_REQUEST,
    PasswordPolicyError: status.HTTP_400_BAD_REQUEST,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    AuthenticationRequiredError: status.HTTP_401_UNAUTHORIZED,
    AccountDisabledError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}


class ClientError(Exception):
    def __init__(self, base_error: ApplicationError, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: ApplicationError):
        self.base_error = base_error
        super().__init__(base_error.message)


def to_http_error(error: ApplicationError) -> Exception:
    """Map an application error to ClientError (known outcomes) or ServerError"""
    for error_type, status_code in CLIENT_ERROR_STATUS.items():
        if isinstance(error, error_type):
            return ClientError(error, status_code=status_code)
    return ServerError(error)
