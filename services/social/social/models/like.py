from datetime import datetime, timezone

from sqlalchemy import BigInteger, DateTime, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from tripshared.database.postgres import Base

_id_type = BigInteger().with_variant(Integer, "sqlite")


class Like(Base):
    __tablename__ = "likes"

    like_id: Mapped[int] = mapped_column(_id_type, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    media_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        UniqueConstraint("user_id", "media_id", name="uq_likes_user_media"),
        Index("ix_likes_media_id", "media_id"),
    )
