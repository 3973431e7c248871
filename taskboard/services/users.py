import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..errors import Conflict
from ..models import User

logger = logging.getLogger(__name__)


class UserStore:
    """Persists user identity and credential hash."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def create(self, email: str, hashed_password: str, display_name: str) -> User:
        if self.get_by_email(email) is not None:
            raise Conflict("Email already registered")

        user = User(email=email, hashed_password=hashed_password, display_name=display_name)
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise Conflict("Email already registered")
        self.session.refresh(user)
        logger.info("Registered user id=%s", user.id)
        return user

    def search_by_email(self, term: str, limit: int = 10) -> List[User]:
        statement = (
            select(User)
            .where(User.email.contains(term, autoescape=True))
            .order_by(User.email)
            .limit(limit)
        )
        return list(self.session.exec(statement).all())
