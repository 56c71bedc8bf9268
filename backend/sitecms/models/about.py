from sqlalchemy import CheckConstraint, DateTime, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column
from sitecms.db.base import Base

ABOUT_ROW_ID = 1


class AboutText(Base):
    __tablename__ = "about"
    __table_args__ = (CheckConstraint(f"id = {ABOUT_ROW_ID}", name="ck_about_single_row"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=ABOUT_ROW_ID)
    text: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[DateTime] = mapped_column(DateTime, server_default=func.now())
