"""Who may see, create, edit and moderate club listings.

Every authorization decision the routes make goes through these functions.
They are pure: a user record and a club record (or ``None``) in, an answer
out. ``user=None`` stands for an anonymous caller and fails every positive
check.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clubdir.schemas.club import ClubRecord
    from clubdir.schemas.user import UserRecord

ADMIN_ROLE = "admin"
USER_ROLE = "user"


class LandingView(str, Enum):
    APPROVAL_REQUIRED = "approval_required"
    CREATE_PROMPT = "create_prompt"
    EDIT_VIEW = "edit_view"


def is_admin(user: UserRecord | None) -> bool:
    return user is not None and user.role == ADMIN_ROLE


def can_view_in_directory(club: ClubRecord) -> bool:
    # Only the listing is gated; profiles stay reachable by id.
    return bool(club.is_active)


def can_create_club(user: UserRecord | None, existing_club: ClubRecord | None) -> bool:
    """An owner with a club goes through edit, never create."""
    if user is None or existing_club is not None:
        return False
    return is_admin(user) or bool(user.is_club_leader)


def can_edit_club(user: UserRecord | None, club: ClubRecord) -> bool:
    if user is None:
        return False
    return is_admin(user) or user.email == club.owner_email


def can_delete_club(user: UserRecord | None) -> bool:
    return is_admin(user)


def can_toggle_active(user: UserRecord | None) -> bool:
    return is_admin(user)


def can_manage_users(user: UserRecord | None) -> bool:
    return is_admin(user)


def can_view_admin(user: UserRecord | None) -> bool:
    return is_admin(user)


def resolve_landing_view(user: UserRecord | None, club: ClubRecord | None) -> LandingView:
    """Pick the portal state for ``user`` given the club they own, if any.

    Existing ownership always wins, even when leader approval was revoked
    after the club was created.
    """
    if club is not None and user is not None:
        return LandingView.EDIT_VIEW
    if can_create_club(user, None):
        return LandingView.CREATE_PROMPT
    return LandingView.APPROVAL_REQUIRED
