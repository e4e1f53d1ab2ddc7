from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

Role = Literal["admin", "user"]


class UserRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    full_name: str | None = None
    role: Role = "user"
    is_club_leader: bool = False
    created_date: datetime

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, v):
        return str(v)
