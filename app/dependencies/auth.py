from datetime import timedelta
from typing import Optional

from fastapi import Depends, Header, Request
from sqlmodel import Session

from app.config import settings
from app.database import get_session
from app.errors import AuthenticationFailed, to_http_exception
from app.services.auth_service import Authenticator
from app.services.user_store import UserStore
from app.utils.token import extract_bearer_token


def get_authenticator(session: Session = Depends(get_session)) -> Authenticator:
    return Authenticator(
        UserStore(session),
        secret_key=settings.secret_key,
        algorithm=settings.algorithm,
        token_ttl=timedelta(minutes=settings.access_token_expire_minutes),
        bcrypt_rounds=settings.bcrypt_rounds,
    )


def get_current_user_id(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    authenticator: Authenticator = Depends(get_authenticator),
) -> int:
    """Reject the request with 401 unless it carries a valid bearer token."""
    try:
        token = extract_bearer_token(authorization)
        user_id = authenticator.verify(token)
    except AuthenticationFailed as exc:
        raise to_http_exception(exc)

    request.state.user_id = user_id
    return user_id
