import uuid

from fastapi import APIRouter, Depends, HTTPException, Query

from clubdir.api.deps import get_platform, require_admin
from clubdir.api.routes.clubs import get_club_or_404
from clubdir.core.config import settings
from clubdir.platform import Platform
from clubdir.schemas.admin import (
    AdminClubListOut,
    AdminOverviewOut,
    AdminUserListOut,
    AdminUserRowOut,
    OwnedClubOut,
)
from clubdir.schemas.club import ClubRecord
from clubdir.schemas.user import UserRecord
from clubdir.services.audit import audit
from clubdir.services.policy import (
    ADMIN_ROLE,
    can_delete_club,
    can_manage_users,
    can_toggle_active,
    is_admin,
)
from clubdir.services.search import filter_admin_clubs

router = APIRouter()


@router.get("/overview", response_model=AdminOverviewOut)
def overview(current: UserRecord = Depends(require_admin), platform: Platform = Depends(get_platform)):
    clubs = platform.clubs.list()
    users = platform.users.list()
    return AdminOverviewOut(
        total_clubs=len(clubs),
        active_clubs=sum(1 for c in clubs if c.is_active),
        total_users=len(users),
        admins=sum(1 for u in users if u.role == ADMIN_ROLE),
    )


@router.get("/clubs", response_model=AdminClubListOut)
def all_clubs(
    q: str = Query(default="", max_length=100),
    current: UserRecord = Depends(require_admin),
    platform: Platform = Depends(get_platform),
):
    rows = filter_admin_clubs(platform.clubs.list(settings.DIRECTORY_SORT), q)
    return AdminClubListOut(rows=rows, count=len(rows), q=q)


@router.post("/clubs/{club_id}/toggle-active", response_model=ClubRecord)
def toggle_active(club_id: str, current: UserRecord = Depends(require_admin), platform: Platform = Depends(get_platform)):
    if not can_toggle_active(current):
        raise HTTPException(403, "Admin access required")
    club = get_club_or_404(platform, club_id)
    updated = platform.clubs.update(club.id, {"is_active": not club.is_active})
    if updated is None:
        raise HTTPException(404, "Club not found")
    audit(platform, current.id, "club", club.id, "activation_toggled", {"is_active": updated.is_active})
    return updated


@router.delete("/clubs/{club_id}", status_code=204)
def delete_club(club_id: str, current: UserRecord = Depends(require_admin), platform: Platform = Depends(get_platform)):
    if not can_delete_club(current):
        raise HTTPException(403, "Admin access required")
    club = get_club_or_404(platform, club_id)
    if not platform.clubs.delete(club.id):
        raise HTTPException(404, "Club not found")
    audit(platform, current.id, "club", club.id, "deleted", {"name": club.name, "owner_email": club.owner_email})


@router.get("/users", response_model=AdminUserListOut)
def all_users(current: UserRecord = Depends(require_admin), platform: Platform = Depends(get_platform)):
    users = platform.users.list(settings.ADMIN_USERS_SORT)
    owned: dict[str, ClubRecord] = {}
    # First match per owner, like the listing order
    for club in platform.clubs.list(settings.DIRECTORY_SORT):
        owned.setdefault(club.owner_email, club)
    rows = []
    for u in users:
        club = owned.get(u.email)
        rows.append(AdminUserRowOut(
            **u.model_dump(),
            club=OwnedClubOut(id=club.id, name=club.name, is_active=club.is_active) if club else None,
        ))
    return AdminUserListOut(rows=rows, count=len(rows))


@router.post("/users/{user_id}/toggle-leader", response_model=UserRecord)
def toggle_leader(user_id: str, current: UserRecord = Depends(require_admin), platform: Platform = Depends(get_platform)):
    if not can_manage_users(current):
        raise HTTPException(403, "Admin access required")
    try:
        user_id = str(uuid.UUID(user_id))
    except ValueError:
        raise HTTPException(400, "Invalid user id")
    target = platform.user_by_id(user_id)
    if target is None:
        raise HTTPException(404, "User not found")
    if is_admin(target):
        raise HTTPException(400, "Admins do not need club leader approval")
    updated = platform.users.update(target.id, {"is_club_leader": not target.is_club_leader})
    if updated is None:
        raise HTTPException(404, "User not found")
    audit(platform, current.id, "user", target.id, "club_leader_toggled", {"is_club_leader": updated.is_club_leader})
    return updated
