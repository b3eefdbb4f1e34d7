"""UserRecord ORM — the relational row behind the User entity.

Invariants:
    - id is an autoincrement 64-bit primary key assigned by the engine
      (plain INTEGER on SQLite, where only that type aliases the rowid)
    - email is unique at the schema level
    - name and email are non-nullable
"""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from user_service.core.user_entity import User
from user_service.db.base import Base


class UserRecord(Base):
    """Row in the `users` table."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )

    def to_entity(self) -> User:
        return User(id=self.id, name=self.name, email=self.email)
