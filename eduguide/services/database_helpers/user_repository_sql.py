# /eduguide/services/database_helpers/user_repository_sql.py

"""
Raw SQLAlchemy queries for the User table. Emails are compared exactly; the
callers are responsible for passing normalized addresses.
"""

from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eduguide.db.models.user_model import User


class UserRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_user_by_email_and_role(self, email: str, role: str) -> Optional[User]:
        """Finds a user only when both the email and the role match."""
        return self.db.query(User).filter(User.email == email, User.role == role).first()

    def add_user(self, record: Dict) -> User:
        new_user = User(**record)
        self.db.add(new_user)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(new_user)
        return new_user
