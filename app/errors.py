from typing import List, Optional

from fastapi import HTTPException, status


class OrderApiError(Exception):
    """Base class for failures the API reports to its callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    reason: Optional[str] = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def detail(self):
        if self.reason:
            return {"reason": self.reason, "message": self.message}
        return self.message


class InvalidInput(OrderApiError):
    status_code = 422

    def __init__(self, issues: List[dict]):
        super().__init__("Invalid input")
        self.issues = issues

    def detail(self):
        return self.issues


class AuthenticationFailed(OrderApiError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class MissingCredential(AuthenticationFailed):
    def __init__(self, message: str = "No authorization header"):
        super().__init__(message)


class MalformedCredential(AuthenticationFailed):
    def __init__(self, message: str = "Invalid authorization format"):
        super().__init__(message)


class ConstraintViolation(OrderApiError):
    status_code = status.HTTP_409_CONFLICT
    reason = "Constraint failed"


class DuplicateIdentity(ConstraintViolation):
    reason = "Unique constraint failed"


class MissingRequiredField(ConstraintViolation):
    reason = "Null constraint failed"


class RecordNotFound(OrderApiError):
    status_code = status.HTTP_404_NOT_FOUND


UNEXPECTED_ERROR_MESSAGE = "An unexpected error has occurred."


def to_http_exception(exc: OrderApiError) -> HTTPException:
    headers = None
    if isinstance(exc, AuthenticationFailed):
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(
        status_code=exc.status_code,
        detail=exc.detail(),
        headers=headers,
    )


def unexpected_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=UNEXPECTED_ERROR_MESSAGE,
    )
