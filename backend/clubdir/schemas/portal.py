from pydantic import BaseModel

from clubdir.schemas.club import ClubRecord
from clubdir.schemas.user import UserRecord
from clubdir.services.policy import LandingView


class PortalOut(BaseModel):
    view: LandingView
    user: UserRecord
    club: ClubRecord | None = None
    can_create_club: bool = False
