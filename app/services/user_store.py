from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.models.user import User
from app.services.store_outcomes import StoreOutcome, Success, classify_integrity_error


class UserStore:
    """Credential store: user rows keyed by id, unique by email."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, user: User) -> StoreOutcome:
        try:
            self.session.add(user)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            outcome = classify_integrity_error(exc)
            if outcome is None:
                raise
            return outcome
        self.session.refresh(user)
        return Success(user)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def get(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)
