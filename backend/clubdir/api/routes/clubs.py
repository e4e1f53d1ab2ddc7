import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query

from clubdir.api.deps import get_current_user, get_platform
from clubdir.core.config import settings
from clubdir.platform import Platform
from clubdir.schemas.club import (
    ALL_CATEGORIES,
    CLUB_CATEGORIES,
    CategoryListOut,
    ClubDirectoryOut,
    ClubProfileOut,
    ClubRecord,
    ClubUpdateIn,
)
from clubdir.schemas.user import UserRecord
from clubdir.services.audit import audit
from clubdir.services.policy import can_edit_club
from clubdir.services.search import directory_clubs, filter_clubs

logger = logging.getLogger(__name__)

router = APIRouter()


def parse_club_id(club_id: str) -> str:
    try:
        return str(uuid.UUID(club_id))
    except ValueError:
        raise HTTPException(400, "Invalid club id")


def get_club_or_404(platform: Platform, club_id: str) -> ClubRecord:
    club = platform.club_by_id(parse_club_id(club_id))
    if club is None:
        raise HTTPException(404, "Club not found")
    return club


@router.get("", response_model=ClubDirectoryOut)
def list_directory(
    q: str = Query(default="", max_length=100),
    category: str = Query(default=ALL_CATEGORIES),
    platform: Platform = Depends(get_platform),
):
    if category != ALL_CATEGORIES and category not in CLUB_CATEGORIES:
        raise HTTPException(400, "Unknown category")
    # is_active in the query only narrows the scan.
    clubs = directory_clubs(platform.clubs.filter({"is_active": True}, settings.DIRECTORY_SORT))
    rows = filter_clubs(clubs, q, category)
    return ClubDirectoryOut(rows=rows, count=len(rows), q=q, category=category)


@router.get("/categories", response_model=CategoryListOut)
def list_categories():
    return CategoryListOut()


@router.get("/{club_id}", response_model=ClubProfileOut)
def club_profile(club_id: str, platform: Platform = Depends(get_platform)):
    # Inactive clubs are still served here so owners can preview by link.
    return ClubProfileOut.from_record(get_club_or_404(platform, club_id))


@router.patch("/{club_id}", response_model=ClubRecord)
def edit_club(
    club_id: str,
    payload: ClubUpdateIn,
    current: UserRecord = Depends(get_current_user),
    platform: Platform = Depends(get_platform),
):
    club = get_club_or_404(platform, club_id)
    if not can_edit_club(current, club):
        raise HTTPException(403, "You cannot edit this club")
    changes = payload.changes()
    updated = platform.clubs.update(club.id, changes)
    if updated is None:
        raise HTTPException(404, "Club not found")
    audit(platform, current.id, "club", club.id, "updated", {"fields": sorted(changes)})
    return updated
