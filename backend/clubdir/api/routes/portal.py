from fastapi import APIRouter, Depends, HTTPException

from clubdir.api.deps import get_current_user, get_platform
from clubdir.platform import Platform
from clubdir.schemas.club import ClubCreateIn, ClubRecord, ClubUpdateIn
from clubdir.schemas.portal import PortalOut
from clubdir.schemas.user import UserRecord
from clubdir.services.audit import audit
from clubdir.services.policy import can_create_club, can_edit_club, resolve_landing_view

router = APIRouter()


@router.get("", response_model=PortalOut)
def portal_state(current: UserRecord = Depends(get_current_user), platform: Platform = Depends(get_platform)):
    club = platform.club_owned_by(current.email)
    return PortalOut(
        view=resolve_landing_view(current, club),
        user=current,
        club=club,
        can_create_club=can_create_club(current, club),
    )


@router.post("/club", response_model=ClubRecord, status_code=201)
def create_my_club(
    payload: ClubCreateIn,
    current: UserRecord = Depends(get_current_user),
    platform: Platform = Depends(get_platform),
):
    existing = platform.club_owned_by(current.email)
    if existing is not None:
        raise HTTPException(409, "You already manage a club; edit it instead")
    if not can_create_club(current, existing):
        raise HTTPException(403, "Club leader approval required")
    club = platform.clubs.create({
        **payload.model_dump(),
        "owner_email": current.email,
        "is_active": True,
    })
    audit(platform, current.id, "club", club.id, "created", {"name": club.name})
    return club


@router.patch("/club", response_model=ClubRecord)
def update_my_club(
    payload: ClubUpdateIn,
    current: UserRecord = Depends(get_current_user),
    platform: Platform = Depends(get_platform),
):
    club = platform.club_owned_by(current.email)
    if club is None or not can_edit_club(current, club):
        raise HTTPException(404, "You do not manage a club yet")
    changes = payload.changes()
    updated = platform.clubs.update(club.id, changes)
    if updated is None:
        raise HTTPException(404, "You do not manage a club yet")
    audit(platform, current.id, "club", club.id, "updated", {"fields": sorted(changes)})
    return updated
