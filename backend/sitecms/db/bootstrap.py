"""First-boot initialization.

``STARTUP_STEPS`` run in order, each awaited before the next starts. Every
step is idempotent, so the whole sequence runs on every start.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from sitecms.core.config import DEFAULT_JWT_SECRET, Settings
from sitecms.core.security import hash_password
from sitecms.db.base import Base
from sitecms.models.about import ABOUT_ROW_ID, AboutText
from sitecms.models.link import Link
from sitecms.models.media import MediaItem  # noqa: F401
from sitecms.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_ABOUT_TEXT = (
    "Welcome to my personal website. This space serves as a collection of my "
    "thoughts, conversations, and connections."
)

DEFAULT_LINKS = [
    {"title": "Podcast", "description": "Gamecraft - Gaming, Esports & VC",
     "url": "https://www.gamnecraftpod.com", "icon": "🎙️", "sort_order": 1},
    {"title": "LinkedIn", "description": "Professional profile and network",
     "url": "https://www.linkedin.com/in/mitchlasky/", "icon": "💼", "sort_order": 2},
    {"title": "Twitter", "description": "Thoughts and commentary",
     "url": "https://www.x.com/mitchlasky", "icon": "𝕏", "sort_order": 3},
    {"title": "Instagram", "description": "Visual stories and moments",
     "url": "https://www.instagram.com/mitchlasky/", "icon": "📷", "sort_order": 4},
    {"title": "Medium", "description": "Long-form writing and essays",
     "url": "https://medium.com/@mitchlasky", "icon": "✍️", "sort_order": 5},
]

Step = Callable[[Engine, Settings], None]


def ensure_directories(engine: Engine, cfg: Settings) -> None:
    Path(cfg.media_dir).mkdir(parents=True, exist_ok=True)
    url = engine.url
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def create_schema(engine: Engine, cfg: Settings) -> None:
    Base.metadata.create_all(engine)


def seed_admin(engine: Engine, cfg: Settings) -> None:
    with Session(engine) as s:
        existing = s.execute(select(User).where(User.username == cfg.seed_admin_user)).scalar_one_or_none()
        if existing:
            return
        s.add(User(username=cfg.seed_admin_user, password_hash=hash_password(cfg.seed_admin_pass)))
        s.commit()
    logger.warning(
        "created default admin user %r; change its password before going live",
        cfg.seed_admin_user,
    )


def seed_about(engine: Engine, cfg: Settings) -> None:
    with Session(engine) as s:
        if s.get(AboutText, ABOUT_ROW_ID) is not None:
            return
        s.add(AboutText(id=ABOUT_ROW_ID, text=DEFAULT_ABOUT_TEXT))
        s.commit()
    logger.info("seeded about text")


def seed_links(engine: Engine, cfg: Settings) -> None:
    with Session(engine) as s:
        count = s.execute(select(func.count()).select_from(Link)).scalar_one()
        if count:
            return
        s.add_all([Link(**row) for row in DEFAULT_LINKS])
        s.commit()
    logger.info("seeded %d default links", len(DEFAULT_LINKS))


def warn_insecure_settings(engine: Engine, cfg: Settings) -> None:
    if cfg.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET is the built-in placeholder; set it in production")
    if not cfg.jwt_expires_min:
        logger.warning("JWT_EXPIRES_MIN is not set; issued tokens never expire")


STARTUP_STEPS: list[Step] = [
    ensure_directories,
    create_schema,
    seed_admin,
    seed_about,
    seed_links,
    warn_insecure_settings,
]


async def run_startup(engine: Engine, cfg: Settings, steps: list[Step] | None = None) -> None:
    for step in steps or STARTUP_STEPS:
        logger.debug("startup step %s", step.__name__)
        await asyncio.to_thread(step, engine, cfg)


def run_startup_sync(engine: Engine, cfg: Settings, steps: list[Step] | None = None) -> None:
    for step in steps or STARTUP_STEPS:
        step(engine, cfg)
