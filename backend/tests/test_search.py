from datetime import datetime, timedelta, timezone

from clubdir.schemas.club import ALL_CATEGORIES, ClubRecord
from clubdir.services.search import directory_clubs, filter_admin_clubs, filter_clubs

BASE = datetime(2026, 3, 1, tzinfo=timezone.utc)


def club(name, description="", category=None, is_active=True, owner_email="owner@ucsc.edu", n=0) -> ClubRecord:
    return ClubRecord(
        id=f"id-{name}",
        name=name,
        description=description,
        category=category,
        contact_email="club@ucsc.edu",
        owner_email=owner_email,
        is_active=is_active,
        created_date=BASE,
        updated_date=BASE + timedelta(minutes=n),
    )


CLUBS = [
    club("UCSC Robotics Club", "Build robots", "Academic", n=3),
    club("Chess Society", "Weekly blitz and ROBOTICS talk", "Recreation & Sports", n=2),
    club("Film Collective", "Screenings", "Arts & Culture", n=1),
    club("Slug Gamers", "", None, n=0),
]


def names(rows):
    return [c.name for c in rows]


def test_empty_query_and_all_categories_keeps_everything_in_order():
    assert names(filter_clubs(CLUBS, "", ALL_CATEGORIES)) == names(CLUBS)


def test_query_matches_name_or_description_case_insensitively():
    assert names(filter_clubs(CLUBS, "robotics", ALL_CATEGORIES)) == ["UCSC Robotics Club", "Chess Society"]


def test_category_is_exact_match():
    assert names(filter_clubs(CLUBS, "", "Academic")) == ["UCSC Robotics Club"]
    assert filter_clubs(CLUBS, "", "academic") == []


def test_query_and_category_combine():
    assert names(filter_clubs(CLUBS, "robotics", "Recreation & Sports")) == ["Chess Society"]


def test_unset_category_only_matches_all():
    assert "Slug Gamers" not in names(filter_clubs(CLUBS, "", "Other"))
    assert "Slug Gamers" in names(filter_clubs(CLUBS, "", ALL_CATEGORIES))


def test_missing_category_argument_means_all():
    assert names(filter_clubs(CLUBS, "film", None)) == ["Film Collective"]


def test_inactive_clubs_are_dropped_before_filtering():
    rows = [club("UCSC Robotics Club", n=2), club("Robotics Guild", is_active=False, n=1)]
    visible = directory_clubs(rows)
    assert names(filter_clubs(visible, "robotics", ALL_CATEGORIES)) == ["UCSC Robotics Club"]


def test_admin_search_matches_owner_email():
    rows = [club("Chess Society", owner_email="knight@ucsc.edu"), club("Film Collective", owner_email="reel@ucsc.edu")]
    assert names(filter_admin_clubs(rows, "KNIGHT")) == ["Chess Society"]
    assert names(filter_admin_clubs(rows, "film")) == ["Film Collective"]
    assert names(filter_admin_clubs(rows, "")) == ["Chess Society", "Film Collective"]
