"""User ORM — a registered account.

Invariants:
    - username is unique and non-nullable
    - password always holds an argon2 hash, never plaintext
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from hackerclone.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(64), unique=True, nullable=False,
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self.username!r})"
