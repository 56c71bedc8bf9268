from datetime import datetime

from pydantic import BaseModel


class MediaOut(BaseModel):
    id: int
    title: str
    description: str | None
    filename: str
    date: str | None
    created_at: datetime | None

    class Config:
        from_attributes = True
