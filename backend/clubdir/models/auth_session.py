import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column
from clubdir.db.base import Base

class AuthSession(Base):
    __tablename__ = "auth_sessions"

    id: Mapped[sa.Uuid] = mapped_column(sa.Uuid, primary_key=True)
    user_id: Mapped[sa.Uuid] = mapped_column(sa.Uuid, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[sa.DateTime] = mapped_column(sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()"))
    revoked_at: Mapped[sa.DateTime | None] = mapped_column(sa.DateTime(timezone=True), nullable=True)

    __table_args__ = (
        sa.Index("ix_auth_sessions_user_created", "user_id", sa.text("created_at DESC")),
    )
