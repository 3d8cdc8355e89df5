from fastapi import HTTPException
from app.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details


def not_found(message: str, error_code: ErrorCode) -> AppException:
    return AppException(404, message, error_code)


def conflict(message: str, error_code: ErrorCode, details: dict | None = None) -> AppException:
    return AppException(409, message, error_code, details)
