from __future__ import annotations

from typing import Iterable

from clubdir.schemas.club import ALL_CATEGORIES, ClubRecord
from clubdir.services.policy import can_view_in_directory


def _contains(haystack: str | None, needle: str) -> bool:
    return needle in (haystack or "").lower()


def directory_clubs(clubs: Iterable[ClubRecord]) -> list[ClubRecord]:
    return [c for c in clubs if can_view_in_directory(c)]


def filter_clubs(clubs: Iterable[ClubRecord], query: str | None, category: str | None = ALL_CATEGORIES) -> list[ClubRecord]:
    """Substring match on name/description plus exact category match.

    Input order is kept as is; there is no ranking.
    """
    q = (query or "").lower()
    category = category or ALL_CATEGORIES
    out = []
    for club in clubs:
        matches_search = not q or _contains(club.name, q) or _contains(club.description, q)
        matches_category = category == ALL_CATEGORIES or club.category == category
        if matches_search and matches_category:
            out.append(club)
    return out


def filter_admin_clubs(clubs: Iterable[ClubRecord], query: str | None) -> list[ClubRecord]:
    q = (query or "").lower()
    return [c for c in clubs if not q or _contains(c.name, q) or _contains(c.owner_email, q)]
