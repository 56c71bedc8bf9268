from pydantic import BaseModel, field_validator
from datetime import datetime

from sitecms.models.link import DEFAULT_ICON


class LinkCreate(BaseModel):
    title: str
    description: str | None = None
    url: str
    icon: str | None = DEFAULT_ICON
    sort_order: int = 0

    @field_validator("title", "url")
    @classmethod
    def required_text(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("icon")
    @classmethod
    def icon_default(cls, v: str | None):
        # an empty icon from the admin form means "use the default"
        return v or DEFAULT_ICON


class LinkOut(BaseModel):
    id: int
    title: str
    description: str | None
    url: str
    icon: str | None
    sort_order: int
    created_at: datetime | None

    class Config:
        from_attributes = True
