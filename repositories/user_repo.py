"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

from db.connection import Database
from models.user import User
from utils.errors import QueryFailure, ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for lookups and inserts on the users table."""

    def __init__(self, db: Database):
        self.db = db

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a user by email address.

        Returns:
            User or None.
        """
        sql = "SELECT * FROM users WHERE email = $1;"
        row = self.db.execute_one(sql, [email])
        return User.from_row(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        """
        Fetch a user by primary key.

        Returns:
            User or None.
        """
        sql = "SELECT * FROM users WHERE id = $1;"
        row = self.db.execute_one(sql, [user_id])
        return User.from_row(row) if row else None

    def add(self, user: User) -> User:
        """
        Insert a new user.

        Args:
            user: The User to persist (its id is ignored).

        Returns:
            The stored User with its id populated.

        Raises:
            ValidationError: If name, email or password is blank.
            QueryFailure: If the insert fails.
        """
        for field_name in ("name", "email", "password"):
            if not getattr(user, field_name):
                raise ValidationError(f"User {field_name} must not be empty")

        sql = """
            INSERT INTO users (name, email, password)
            VALUES ($1, $2, $3)
            RETURNING *;
        """
        row = self.db.execute_one(sql, [user.name, user.email, user.password])
        if row is None:
            raise QueryFailure("INSERT INTO users returned no row")
        saved = User.from_row(row)
        logger.info(f"Added user #{saved.id}")
        return saved
