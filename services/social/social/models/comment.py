from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tripshared.database.postgres import Base

# SQLite only autoincrements INTEGER primary keys.
_id_type = BigInteger().with_variant(Integer, "sqlite")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Comment(Base):
    __tablename__ = "comments"

    comment_id: Mapped[int] = mapped_column(_id_type, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # Soft references: users and media live in other services
    author_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    author_external_id: Mapped[str] = mapped_column(String(128), nullable=False)
    media_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    # No FK: deleting a parent leaves its replies in place, still pointing at it
    parent_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    __table_args__ = (
        Index("ix_comments_media_parent", "media_id", "parent_id"),
        Index("ix_comments_parent_id", "parent_id"),
        Index("ix_comments_author_id", "author_id"),
    )
