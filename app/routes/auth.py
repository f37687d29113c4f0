import logging

from fastapi import APIRouter, Depends, status
from app.dependencies.auth import get_authenticator
from app.errors import OrderApiError, to_http_exception, unexpected_error
from app.schemas.user_schemas import RegisteredUser, UserRegister, UserLogin, Token, UserResponse
from app.services.auth_service import Authenticator

logger = logging.getLogger(__name__)

router = APIRouter()


# -------- AUTH ROUTES --------

@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def sign_up(payload: UserRegister, authenticator: Authenticator = Depends(get_authenticator)):
    try:
        user = authenticator.register(
            payload.email,
            payload.password,
            payload.first_name,
            payload.last_name,
        )
    except OrderApiError as exc:
        raise to_http_exception(exc)
    except Exception:
        logger.exception("Sign-up failed")
        raise unexpected_error()

    return UserResponse(
        message="Successfully signed up",
        user=RegisteredUser(user_id=user.id, email=user.email),
    )


@router.post("/signin", response_model=Token)
def sign_in(payload: UserLogin, authenticator: Authenticator = Depends(get_authenticator)):
    try:
        token = authenticator.authenticate(payload.email, payload.password)
    except OrderApiError as exc:
        raise to_http_exception(exc)
    except Exception:
        logger.exception("Sign-in failed")
        raise unexpected_error()

    return Token(access_token=token, token_type="bearer")
