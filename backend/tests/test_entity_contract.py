import pytest

from clubdir.platform.base import CLUB_FIELDS, InvalidQueryError, check_fields, parse_sort_key
from tests.fakes import club_fields, memory_platform


def test_sort_key_parsing():
    assert parse_sort_key("-updated_date", CLUB_FIELDS) == ("updated_date", True)
    assert parse_sort_key("name", CLUB_FIELDS) == ("name", False)
    assert parse_sort_key(None, CLUB_FIELDS) is None
    assert parse_sort_key("", CLUB_FIELDS) is None


def test_unknown_sort_field_is_rejected():
    with pytest.raises(InvalidQueryError):
        parse_sort_key("-password_hash", CLUB_FIELDS)


def test_unknown_filter_fields_are_rejected():
    with pytest.raises(InvalidQueryError):
        check_fields({"owner_email": "x", "secret": 1}, CLUB_FIELDS)


def test_filter_by_owner_and_most_recent_first():
    platform = memory_platform()
    first = platform.clubs.create(club_fields("Alpha", owner_email="a@ucsc.edu"))
    second = platform.clubs.create(club_fields("Beta", owner_email="b@ucsc.edu"))
    platform.clubs.update(first.id, {"description": "touched"})

    assert [c.name for c in platform.clubs.list("-updated_date")] == ["Alpha", "Beta"]
    assert [c.id for c in platform.clubs.filter({"owner_email": "b@ucsc.edu"})] == [second.id]
    assert platform.club_owned_by("nobody@ucsc.edu") is None


def test_update_moves_updated_date_forward():
    platform = memory_platform()
    created = platform.clubs.create(club_fields("Alpha", owner_email="a@ucsc.edu"))
    updated = platform.clubs.update(created.id, {"is_active": False})
    assert updated.updated_date > created.updated_date
    assert updated.created_date == created.created_date


def test_update_and_delete_of_missing_rows():
    platform = memory_platform()
    assert platform.clubs.update("missing", {"name": "x"}) is None
    assert platform.clubs.delete("missing") is False


def test_identity_fields_are_not_writable():
    platform = memory_platform()
    created = platform.clubs.create(club_fields("Alpha", owner_email="a@ucsc.edu"))
    with pytest.raises(InvalidQueryError):
        platform.clubs.update(created.id, {"id": "other"})
