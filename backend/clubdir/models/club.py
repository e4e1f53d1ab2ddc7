import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column
from clubdir.db.base import Base

class Club(Base):
    __tablename__ = "clubs"

    id: Mapped[sa.Uuid] = mapped_column(sa.Uuid, primary_key=True, server_default=sa.text("gen_random_uuid()"))
    name: Mapped[str] = mapped_column(sa.Text, nullable=False)
    description: Mapped[str] = mapped_column(sa.Text, nullable=False)
    category: Mapped[str | None] = mapped_column(sa.Text, nullable=True)
    logo_url: Mapped[str | None] = mapped_column(sa.Text, nullable=True)

    contact_name: Mapped[str | None] = mapped_column(sa.Text, nullable=True)
    contact_email: Mapped[str] = mapped_column(sa.Text, nullable=False)
    website_link: Mapped[str | None] = mapped_column(sa.Text, nullable=True)
    instagram_link: Mapped[str | None] = mapped_column(sa.Text, nullable=True)
    discord_link: Mapped[str | None] = mapped_column(sa.Text, nullable=True)
    calendar_link: Mapped[str | None] = mapped_column(sa.Text, nullable=True)
    other_social_links: Mapped[str | None] = mapped_column(sa.Text, nullable=True)

    # Weak reference to users.email; one club per owner is checked before insert, not here.
    owner_email: Mapped[str] = mapped_column(sa.Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(sa.Boolean, nullable=False, server_default=sa.text("true"))

    created_date: Mapped[sa.DateTime] = mapped_column(sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()"))
    updated_date: Mapped[sa.DateTime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()"), onupdate=sa.func.now()
    )

    __table_args__ = (
        sa.Index("ix_clubs_owner_email", "owner_email"),
        sa.Index("ix_clubs_active_updated", "is_active", sa.text("updated_date DESC")),
    )
