import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column
from clubdir.db.base import Base

class User(Base):
    __tablename__ = "users"

    id: Mapped[sa.Uuid] = mapped_column(sa.Uuid, primary_key=True, server_default=sa.text("gen_random_uuid()"))
    email: Mapped[str] = mapped_column(sa.Text, unique=True, nullable=False)
    full_name: Mapped[str | None] = mapped_column(sa.Text, nullable=True)
    role: Mapped[str] = mapped_column(sa.Text, nullable=False, server_default="user")
    is_club_leader: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, server_default=sa.text("false"))
    password_hash: Mapped[str] = mapped_column(sa.Text, nullable=False)
    created_date: Mapped[sa.DateTime] = mapped_column(sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()"))
    updated_date: Mapped[sa.DateTime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()"), onupdate=sa.func.now()
    )
    last_login_at: Mapped[sa.DateTime | None] = mapped_column(sa.DateTime(timezone=True), nullable=True)

    __table_args__ = (
        sa.CheckConstraint("role in ('admin','user')", name="ck_user_role"),
    )
