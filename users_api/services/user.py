"""User service: one parameterized statement per operation."""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from users_api.errors import EmailExistsError, UserNotFoundError
from users_api.models.user import User
from users_api.schemas.user import UserCreate, UserUpdate
from users_api.security import hash_password

logger = logging.getLogger("users_api")

users_table = User.__table__


class UserService:
    """Reads and writes rows of the users table.

    Every method issues exactly one statement and returns plain row mappings;
    nothing is cached between calls.
    """

    def list_users(self, db: Session) -> list[dict[str, Any]]:
        """Return every user row ordered by id."""
        result = db.execute(select(users_table).order_by(users_table.c.id))
        return [dict(row) for row in result.mappings()]

    def get_user(self, db: Session, user_id: int) -> list[dict[str, Any]]:
        """Return the rows matching user_id. Raises UserNotFoundError if there are none."""
        result = db.execute(select(users_table).where(users_table.c.id == user_id))
        rows = [dict(row) for row in result.mappings()]
        if not rows:
            raise UserNotFoundError(user_id)
        return rows

    def create_user(self, db: Session, data: UserCreate) -> dict[str, Any]:
        """Hash the password and insert a new row. Returns the stored row."""
        now = datetime.utcnow()
        stmt = (
            insert(users_table)
            .values(
                email=data.email,
                password_hash=hash_password(data.password),
                first_name=data.first_name,
                last_name=data.last_name,
                role=data.role,
                is_active=data.is_active,
                created_at=now,
                updated_at=now,
            )
            .returning(*users_table.c)
        )
        row = self._execute_write(db, stmt)
        logger.info("Created user %s", row["id"])
        return row

    def update_user(self, db: Session, user_id: int, data: UserUpdate) -> dict[str, Any]:
        """Replace the listed fields of a row and refresh updated_at.

        password_hash and is_active are only written when a value was supplied.
        """
        candidates = {
            "email": data.email,
            "password_hash": hash_password(data.password) if data.password else None,
            "first_name": data.first_name,
            "last_name": data.last_name,
            "role": data.role,
            "is_active": data.is_active,
        }
        values = {field: value for field, value in candidates.items() if value is not None}
        values["updated_at"] = datetime.utcnow()

        stmt = update(users_table).where(users_table.c.id == user_id).values(**values).returning(*users_table.c)
        row = self._execute_write(db, stmt)
        if row is None:
            raise UserNotFoundError(user_id)
        logger.info("Updated user %s (fields: %s)", user_id, ", ".join(sorted(values)))
        return row

    def delete_user(self, db: Session, user_id: int) -> dict[str, Any]:
        """Hard-delete a row. Returns its prior contents."""
        stmt = delete(users_table).where(users_table.c.id == user_id).returning(*users_table.c)
        row = self._execute_write(db, stmt)
        if row is None:
            raise UserNotFoundError(user_id)
        logger.info("Deleted user %s", user_id)
        return row

    def _execute_write(self, db: Session, stmt) -> dict[str, Any] | None:
        """Execute a write statement with RETURNING and commit it."""
        try:
            row = db.execute(stmt).mappings().first()
            db.commit()
        except IntegrityError:
            # email is the only constraint the request schemas cannot check up front
            db.rollback()
            raise EmailExistsError() from None
        return dict(row) if row is not None else None


_user_service: UserService | None = None


def get_user_service() -> UserService:
    """Get singleton user service instance."""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service
