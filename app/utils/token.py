from jose import jwt
from datetime import datetime, timedelta, timezone
from typing import Optional

from app.errors import AuthenticationFailed, MalformedCredential, MissingCredential


def create_access_token(
    data: dict,
    secret_key: str,
    algorithm: str,
    expires_delta: timedelta,
):
    to_encode = data.copy()

    expire = datetime.now(timezone.utc) + expires_delta

    to_encode.update({"exp": expire})

    encoded_jwt = jwt.encode(
        to_encode,
        secret_key,
        algorithm=algorithm
    )
    return encoded_jwt


def decode_access_token(token: str, secret_key: str, algorithm: str):
    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[algorithm],
        )
        return payload
    except jwt.JWTError:
        return None


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        raise MissingCredential()

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer" or not parts[1]:
        raise MalformedCredential()

    return parts[1]


def user_id_from_payload(payload: Optional[dict]) -> int:
    if payload is None:
        raise AuthenticationFailed()

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise AuthenticationFailed()
