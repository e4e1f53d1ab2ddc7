from pydantic import BaseModel, Field

from clubdir.schemas.club import ClubRecord
from clubdir.schemas.user import UserRecord


class AdminOverviewOut(BaseModel):
    total_clubs: int
    active_clubs: int
    total_users: int
    admins: int


class AdminClubListOut(BaseModel):
    rows: list[ClubRecord] = Field(default_factory=list)
    count: int
    q: str = ""


class OwnedClubOut(BaseModel):
    id: str
    name: str
    is_active: bool


class AdminUserRowOut(UserRecord):
    club: OwnedClubOut | None = None


class AdminUserListOut(BaseModel):
    rows: list[AdminUserRowOut] = Field(default_factory=list)
    count: int
