from __future__ import annotations

import uuid
from typing import Any

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from clubdir.core.security import hash_password, now_utc, verify_password
from clubdir.models.audit_log import AuditLog
from clubdir.models.auth_session import AuthSession
from clubdir.models.club import Club
from clubdir.models.user import User
from clubdir.platform.base import (
    CLUB_FIELDS,
    CLUB_WRITABLE_FIELDS,
    USER_FIELDS,
    USER_WRITABLE_FIELDS,
    EmailTakenError,
    Platform,
    check_fields,
    parse_sort_key,
)
from clubdir.schemas.club import ClubRecord
from clubdir.schemas.user import UserRecord


def _as_uuid(value) -> uuid.UUID | None:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class _SqlCollection:
    model = None
    record = None
    fields: frozenset[str] = frozenset()
    writable: frozenset[str] = frozenset()

    def __init__(self, db: Session):
        self.db = db

    def _select(self, where: dict[str, Any], sort: str | None):
        check_fields(where, self.fields)
        stmt = sa.select(self.model)
        for field, value in where.items():
            column = getattr(self.model, field)
            if field == "id":
                value = _as_uuid(value)
                if value is None:
                    # Malformed ids match nothing.
                    return None
            stmt = stmt.where(column.is_(None) if value is None else column == value)
        order = parse_sort_key(sort, self.fields)
        if order:
            name, descending = order
            column = getattr(self.model, name)
            stmt = stmt.order_by(column.desc() if descending else column.asc(), self.model.id)
        return stmt

    def _get_row(self, row_id: str):
        key = _as_uuid(row_id)
        if key is None:
            return None
        return self.db.get(self.model, key)

    def list(self, sort: str | None = None):
        return self.filter({}, sort)

    def filter(self, where: dict[str, Any], sort: str | None = None):
        stmt = self._select(where, sort)
        if stmt is None:
            return []
        rows = self.db.execute(stmt).scalars().all()
        return [self.record.model_validate(r) for r in rows]

    def update(self, row_id: str, fields: dict[str, Any]):
        check_fields(fields, self.writable)
        row = self._get_row(row_id)
        if row is None:
            return None
        for field, value in fields.items():
            setattr(row, field, value)
        self.db.commit()
        self.db.refresh(row)
        return self.record.model_validate(row)


class SqlClubCollection(_SqlCollection):
    model = Club
    record = ClubRecord
    fields = CLUB_FIELDS
    writable = CLUB_WRITABLE_FIELDS

    def create(self, fields: dict[str, Any]) -> ClubRecord:
        check_fields(fields, self.writable)
        row = Club(**fields)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return ClubRecord.model_validate(row)

    def delete(self, club_id: str) -> bool:
        row = self._get_row(club_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.commit()
        return True


class SqlUserCollection(_SqlCollection):
    model = User
    record = UserRecord
    fields = USER_FIELDS
    writable = USER_WRITABLE_FIELDS


class SqlAuthGateway:
    def __init__(self, db: Session):
        self.db = db

    def sign_up(self, email: str, password: str, full_name: str | None, role: str) -> UserRecord:
        exists = self.db.execute(sa.select(User.id).where(User.email == email)).first()
        if exists:
            raise EmailTakenError(email)
        row = User(
            email=email,
            full_name=full_name,
            role=role,
            is_club_leader=False,
            password_hash=hash_password(password),
            last_login_at=now_utc(),
        )
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise EmailTakenError(email) from exc
        self.db.refresh(row)
        return UserRecord.model_validate(row)

    def sign_in(self, email: str, password: str) -> UserRecord | None:
        row = self.db.execute(sa.select(User).where(User.email == email)).scalar_one_or_none()
        if row is None or not verify_password(password, row.password_hash):
            return None
        row.last_login_at = now_utc()
        self.db.commit()
        return UserRecord.model_validate(row)

    def open_session(self, user_id: str) -> str:
        sid = uuid.uuid4()
        self.db.add(AuthSession(id=sid, user_id=_as_uuid(user_id)))
        self.db.commit()
        return str(sid)

    def _active_session(self, session_id: str) -> AuthSession | None:
        sid = _as_uuid(session_id)
        if sid is None:
            return None
        row = self.db.get(AuthSession, sid)
        if row is None or row.revoked_at is not None:
            return None
        return row

    def me(self, session_id: str) -> UserRecord | None:
        session = self._active_session(session_id)
        if session is None:
            return None
        user = self.db.get(User, session.user_id)
        return UserRecord.model_validate(user) if user else None

    def is_authenticated(self, session_id: str) -> bool:
        return self._active_session(session_id) is not None

    def logout(self, session_id: str) -> None:
        session = self._active_session(session_id)
        if session is None:
            return
        session.revoked_at = now_utc()
        self.db.commit()


class SqlAuditSink:
    def __init__(self, db: Session):
        self.db = db

    def record(self, actor_user_id: str | None, entity_type: str, entity_id: str, action: str, data: dict) -> None:
        self.db.add(AuditLog(
            actor_user_id=_as_uuid(actor_user_id) if actor_user_id else None,
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            data=data or {},
        ))
        self.db.commit()


def sql_platform(db: Session) -> Platform:
    return Platform(
        auth=SqlAuthGateway(db),
        clubs=SqlClubCollection(db),
        users=SqlUserCollection(db),
        audit=SqlAuditSink(db),
    )
