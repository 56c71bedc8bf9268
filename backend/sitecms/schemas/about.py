from pydantic import BaseModel

class AboutOut(BaseModel):
    text: str

class AboutUpdate(BaseModel):
    text: str
