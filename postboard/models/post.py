"""
Postboard Backend — Post SQLAlchemy Model
===========================================

What:  ORM model for the `post` table.
Who:   Used by PostService for CRUD statements and by Alembic.

Table Design Rationale:
    - user_id: required FK to user.id with ON DELETE CASCADE, so removing a
      user removes their posts in the same statement
    - title VARCHAR(255), content TEXT: both NOT NULL
    - created_at: server-assigned; drives newest-first listing

    Index on created_at DESC:
        Backs `ORDER BY created_at DESC LIMIT/OFFSET` page queries.

Ownership:
    There is no session or identity layer in the store. Update and delete
    prove ownership purely through their WHERE clause (id AND user_id) when
    ENFORCE_POST_OWNERSHIP is on.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from postboard.database import Base


class Post(Base):
    __tablename__ = "post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_post_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, user_id={self.user_id}, created_at='{self.created_at}')>"
