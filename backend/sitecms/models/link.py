from sqlalchemy import String, Integer, DateTime, Text, func
from sqlalchemy.orm import Mapped, mapped_column
from sitecms.db.base import Base

DEFAULT_ICON = "🔗"


class Link(Base):
    __tablename__ = "links"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    url: Mapped[str] = mapped_column(String(2048))
    icon: Mapped[str | None] = mapped_column(String(16), default=DEFAULT_ICON)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, server_default="0", index=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())
