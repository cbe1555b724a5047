# profile_api/services/user_repository.py

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from profile_api.core.errors import PersistenceError
from profile_api.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def insert(self, profile_reference: Optional[str] = None) -> int:
        """Save a new user row and return its generated id."""
        user = User(profile_reference=profile_reference)
        try:
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to insert user (profileReference={profile_reference!r}): {e}")
            raise PersistenceError(f"Failed to save user: {e}") from e

        logger.info(f"Created user {user.id} (profileReference={profile_reference!r})")
        return user.id
