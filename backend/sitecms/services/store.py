from __future__ import annotations

from typing import Protocol

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from sitecms.models.about import ABOUT_ROW_ID, AboutText
from sitecms.models.link import Link
from sitecms.models.media import MediaItem
from sitecms.models.user import User


class SiteStore(Protocol):
    """Everything the route handlers need from persistence.

    Route handlers receive an implementation through ``sitecms.api.deps.store``;
    tests may override that dependency with an in-memory fake.
    """

    def find_user(self, username: str) -> User | None: ...

    def get_about_text(self) -> str | None: ...

    def set_about_text(self, text: str) -> bool: ...

    def list_media(self) -> list[MediaItem]: ...

    def get_media(self, media_id: int) -> MediaItem | None: ...

    def add_media(self, title: str, description: str | None, filename: str, date: str | None) -> MediaItem: ...

    def delete_media(self, media_id: int) -> bool: ...

    def list_links(self) -> list[Link]: ...

    def add_link(
        self, title: str, description: str | None, url: str, icon: str | None, sort_order: int = 0
    ) -> Link: ...

    def delete_link(self, link_id: int) -> bool: ...


class SqlSiteStore:
    def __init__(self, s: Session):
        self.s = s

    def find_user(self, username: str) -> User | None:
        return self.s.execute(select(User).where(User.username == username)).scalar_one_or_none()

    def get_about_text(self) -> str | None:
        return self.s.execute(select(AboutText.text).where(AboutText.id == ABOUT_ROW_ID)).scalar_one_or_none()

    def set_about_text(self, text: str) -> bool:
        row = self.s.get(AboutText, ABOUT_ROW_ID)
        if row is None:
            return False
        row.text = text
        row.updated_at = func.now()
        self.s.commit()
        return True

    def list_media(self) -> list[MediaItem]:
        q = select(MediaItem).order_by(
            MediaItem.date.is_(None),
            MediaItem.date.desc(),
            MediaItem.created_at.desc(),
            MediaItem.id.desc(),
        )
        return list(self.s.execute(q).scalars().all())

    def get_media(self, media_id: int) -> MediaItem | None:
        return self.s.get(MediaItem, media_id)

    def add_media(self, title: str, description: str | None, filename: str, date: str | None) -> MediaItem:
        m = MediaItem(title=title, description=description, filename=filename, date=date)
        self.s.add(m)
        try:
            self.s.commit()
        except Exception:
            self.s.rollback()
            raise
        self.s.refresh(m)
        return m

    def delete_media(self, media_id: int) -> bool:
        res = self.s.execute(delete(MediaItem).where(MediaItem.id == media_id))
        self.s.commit()
        return res.rowcount > 0

    def list_links(self) -> list[Link]:
        q = select(Link).order_by(Link.sort_order.asc(), Link.id.asc())
        return list(self.s.execute(q).scalars().all())

    def add_link(
        self, title: str, description: str | None, url: str, icon: str | None, sort_order: int = 0
    ) -> Link:
        ln = Link(title=title, description=description, url=url, icon=icon, sort_order=sort_order)
        self.s.add(ln)
        self.s.commit()
        self.s.refresh(ln)
        return ln

    def delete_link(self, link_id: int) -> bool:
        res = self.s.execute(delete(Link).where(Link.id == link_id))
        self.s.commit()
        return res.rowcount > 0
