from typing import Literal

from pydantic import BaseModel


class SuccessOut(BaseModel):
    success: Literal[True] = True


class CreatedOut(SuccessOut):
    id: int
