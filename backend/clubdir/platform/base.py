"""Entity access contract the application is written against.

Collections expose ``list``/``filter``/``create``/``update``/``delete`` and
the auth oracle answers "who is this session". Each call is one round trip;
nothing here retries, locks or merges, so concurrent writers race and the
last write wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Protocol

from clubdir.schemas.club import ClubRecord
from clubdir.schemas.user import UserRecord

CLUB_FIELDS = frozenset(ClubRecord.model_fields)
CLUB_WRITABLE_FIELDS = CLUB_FIELDS - {"id", "created_date", "updated_date"}
USER_FIELDS = frozenset(UserRecord.model_fields)
USER_WRITABLE_FIELDS = frozenset({"full_name", "role", "is_club_leader"})


class PlatformError(Exception):
    pass


class EmailTakenError(PlatformError):
    pass


class InvalidQueryError(PlatformError, ValueError):
    pass


def parse_sort_key(sort: str | None, allowed: Iterable[str]) -> tuple[str, bool] | None:
    """``"-updated_date"`` -> ``("updated_date", True)``; ``None``/empty -> ``None``."""
    if not sort:
        return None
    descending = sort.startswith("-")
    field = sort[1:] if descending else sort
    if field not in allowed:
        raise InvalidQueryError(f"Unknown sort field: {field}")
    return field, descending


def check_fields(fields: Iterable[str], allowed: Iterable[str]) -> None:
    unknown = sorted(set(fields) - set(allowed))
    if unknown:
        raise InvalidQueryError(f"Unknown fields: {', '.join(unknown)}")


class ClubCollection(Protocol):
    def list(self, sort: str | None = None) -> list[ClubRecord]: ...

    def filter(self, where: dict[str, Any], sort: str | None = None) -> list[ClubRecord]: ...

    def create(self, fields: dict[str, Any]) -> ClubRecord: ...

    def update(self, club_id: str, fields: dict[str, Any]) -> ClubRecord | None: ...

    def delete(self, club_id: str) -> bool: ...


class UserCollection(Protocol):
    def list(self, sort: str | None = None) -> list[UserRecord]: ...

    def filter(self, where: dict[str, Any], sort: str | None = None) -> list[UserRecord]: ...

    def update(self, user_id: str, fields: dict[str, Any]) -> UserRecord | None: ...


class AuthGateway(Protocol):
    def sign_up(self, email: str, password: str, full_name: str | None, role: str) -> UserRecord: ...

    def sign_in(self, email: str, password: str) -> UserRecord | None: ...

    def open_session(self, user_id: str) -> str: ...

    def me(self, session_id: str) -> UserRecord | None: ...

    def is_authenticated(self, session_id: str) -> bool: ...

    def logout(self, session_id: str) -> None: ...


class AuditSink(Protocol):
    def record(self, actor_user_id: str | None, entity_type: str, entity_id: str, action: str, data: dict) -> None: ...


@dataclass
class Platform:
    auth: AuthGateway
    clubs: ClubCollection
    users: UserCollection
    audit: AuditSink

    def club_owned_by(self, email: str) -> ClubRecord | None:
        rows = self.clubs.filter({"owner_email": email}, "-updated_date")
        return rows[0] if rows else None

    def club_by_id(self, club_id: str) -> ClubRecord | None:
        rows = self.clubs.filter({"id": club_id})
        return rows[0] if rows else None

    def user_by_id(self, user_id: str) -> UserRecord | None:
        rows = self.users.filter({"id": user_id})
        return rows[0] if rows else None
