"""
Postboard Backend — User SQLAlchemy Model
===========================================

What:  ORM model for the `user` table.
Who:   Used by UserService/AuthService and by Alembic for schema management.

Table Design Rationale:
    - Integer surrogate key generated by the store
    - user_name: UNIQUE; duplicates are rejected by the store, not the app
    - password_hash: bcrypt output only, the raw password is never stored
    - created_at: server-assigned, never updated

Lifecycle:
    Created on registration, read on login and lookup. No endpoint updates
    or deletes a user; deleting one directly in the store cascades to posts.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from postboard.database import Base


class User(Base):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(
        "user_name",
        String(100),
        unique=True,
        nullable=False,
    )

    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
