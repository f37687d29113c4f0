# app/services/auth_service.py
import logging
from datetime import timedelta

from pydantic import ValidationError

from app.errors import (
    AuthenticationFailed,
    ConstraintViolation,
    DuplicateIdentity,
    InvalidInput,
    MissingRequiredField,
)
from app.models.user import User
from app.schemas.user_schemas import UserRegister
from app.services.store_outcomes import NullViolation, Success, UniqueViolation
from app.services.user_store import UserStore
from app.utils.hash import dummy_hash, hash_password, verify_password
from app.utils.token import create_access_token, decode_access_token, user_id_from_payload

logger = logging.getLogger(__name__)

SIGN_IN_FAILED = "Authentication failed. Please check your email and/or password and try again."


class Authenticator:
    """
    Registers users, checks their credentials and issues/validates session tokens.

    The signing secret and hashing cost are passed in at construction.
    """

    def __init__(
        self,
        users: UserStore,
        secret_key: str,
        algorithm: str = "HS256",
        token_ttl: timedelta = timedelta(hours=1),
        bcrypt_rounds: int = 10,
    ):
        self.users = users
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.token_ttl = token_ttl
        self.bcrypt_rounds = bcrypt_rounds

    def register(self, email: str, password: str, first_name: str, last_name: str) -> User:
        try:
            data = UserRegister(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
            )
        except ValidationError as exc:
            raise InvalidInput(
                [
                    {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
                    for error in exc.errors()
                ]
            )

        user = User(
            email=data.email,
            password_hash=hash_password(data.password, self.bcrypt_rounds),
            first_name=data.first_name,
            last_name=data.last_name,
        )

        outcome = self.users.create(user)
        if isinstance(outcome, Success):
            logger.info(f"Registered user {outcome.value.id}")
            return outcome.value

        logger.info(f"Sign-up rejected by store: {type(outcome).__name__}")
        if isinstance(outcome, UniqueViolation):
            raise DuplicateIdentity("An account with this email already exists")
        if isinstance(outcome, NullViolation):
            raise MissingRequiredField("User requires an email")
        raise ConstraintViolation("User could not be created")

    def authenticate(self, email: str, password: str) -> str:
        user = self.users.get_by_email(email)

        if user is None:
            # same hashing work as a real comparison so timing does not reveal the account
            verify_password(password, dummy_hash(self.bcrypt_rounds))
            raise AuthenticationFailed(SIGN_IN_FAILED)

        if not verify_password(password, user.password_hash):
            raise AuthenticationFailed(SIGN_IN_FAILED)

        return self.issue_token(user.id)

    def issue_token(self, user_id: int) -> str:
        return create_access_token(
            {"sub": str(user_id)},
            self.secret_key,
            self.algorithm,
            self.token_ttl,
        )

    def verify(self, token: str) -> int:
        payload = decode_access_token(token, self.secret_key, self.algorithm)
        return user_id_from_payload(payload)
