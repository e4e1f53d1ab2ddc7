import logging

from fastapi import APIRouter, Depends, HTTPException

from clubdir.api.deps import get_current_user, get_platform, get_session_id, peek_user
from clubdir.core.config import settings
from clubdir.core.security import create_access_token_for_session
from clubdir.platform import EmailTakenError, Platform
from clubdir.schemas.auth import CapabilitiesOut, LoginIn, RegisterIn, SessionOut, SimpleOKOut, TokenOut
from clubdir.schemas.user import UserRecord
from clubdir.services.audit import audit
from clubdir.services.policy import ADMIN_ROLE, USER_ROLE, can_manage_users, can_view_admin

logger = logging.getLogger(__name__)

router = APIRouter()


def _issue_token(platform: Platform, user: UserRecord) -> TokenOut:
    sid = platform.auth.open_session(user.id)
    return TokenOut(access_token=create_access_token_for_session(user.id, sid=sid))


@router.post("/register", response_model=TokenOut)
def register(payload: RegisterIn, platform: Platform = Depends(get_platform)):
    role = ADMIN_ROLE if payload.email in settings.bootstrap_admin_emails() else USER_ROLE
    full_name = (payload.full_name or "").strip() or None
    try:
        user = platform.auth.sign_up(payload.email, payload.password, full_name, role)
    except EmailTakenError:
        raise HTTPException(409, "Account already registered, please log in")
    audit(platform, user.id, "user", user.id, "registered", {"role": role})
    return _issue_token(platform, user)


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, platform: Platform = Depends(get_platform)):
    user = platform.auth.sign_in(payload.email, payload.password)
    if user is None:
        logger.info("failed login for %s", payload.email)
        raise HTTPException(401, "Invalid email or password")
    return _issue_token(platform, user)


@router.post("/logout", response_model=SimpleOKOut)
def logout(
    sid: str | None = Depends(get_session_id),
    current: UserRecord = Depends(get_current_user),
    platform: Platform = Depends(get_platform),
):
    platform.auth.logout(sid)
    logger.info("user %s logged out", current.id)
    return SimpleOKOut()


@router.get("/me", response_model=UserRecord)
def me(current: UserRecord = Depends(get_current_user)):
    return current


@router.get("/session", response_model=SessionOut)
def session_state(user: UserRecord | None = Depends(peek_user)):
    return SessionOut(
        is_authenticated=user is not None,
        user=user,
        login_url=settings.LOGIN_URL,
        capabilities=CapabilitiesOut(
            can_use_portal=user is not None,
            can_view_admin=can_view_admin(user),
            can_manage_users=can_manage_users(user),
        ),
    )
