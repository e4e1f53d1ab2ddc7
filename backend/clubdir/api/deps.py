from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from clubdir.core.security import decode_token
from clubdir.db.session import get_db
from clubdir.platform import Platform, sql_platform
from clubdir.schemas.user import UserRecord
from clubdir.services.policy import can_view_admin

bearer = HTTPBearer(auto_error=False)


def get_platform(db: Session = Depends(get_db)) -> Platform:
    return sql_platform(db)


def session_id_from_token(token: str) -> str | None:
    """The session id of a valid access token, else None."""
    try:
        payload = decode_token(token)
    except JWTError:
        return None
    if payload.get("type") != "access" or not payload.get("sid"):
        return None
    return payload["sid"]


def get_session_id(creds: HTTPAuthorizationCredentials | None = Depends(bearer)) -> str | None:
    if creds is None:
        return None
    sid = session_id_from_token(creds.credentials)
    if sid is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    return sid


def get_optional_user(
    sid: str | None = Depends(get_session_id),
    platform: Platform = Depends(get_platform),
) -> UserRecord | None:
    if sid is None:
        return None
    user = platform.auth.me(sid)
    if user is None:
        raise HTTPException(status_code=401, detail="Session expired")
    return user


def get_current_user(user: UserRecord | None = Depends(get_optional_user)) -> UserRecord:
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated", headers={"WWW-Authenticate": "Bearer"})
    return user


def require_admin(user: UserRecord = Depends(get_current_user)) -> UserRecord:
    if not can_view_admin(user):
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def peek_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    platform: Platform = Depends(get_platform),
) -> UserRecord | None:
    """Like get_optional_user, but a stale or bad token just means anonymous."""
    sid = session_id_from_token(creds.credentials) if creds is not None else None
    if sid is None:
        return None
    return platform.auth.me(sid)
