from pydantic import BaseModel, Field, field_validator

from clubdir.schemas.club import looks_like_email
from clubdir.schemas.user import UserRecord

# bcrypt only hashes the first 72 bytes and newer releases refuse longer input.
PASSWORD_MAX_BYTES = 72


class _EmailIn(BaseModel):
    email: str = Field(..., min_length=3, max_length=320, examples=["student@ucsc.edu"])

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not looks_like_email(v):
            raise ValueError("Invalid email")
        return v


class RegisterIn(_EmailIn):
    password: str = Field(..., min_length=8, max_length=128)
    full_name: str | None = Field(default=None, max_length=160)

    @field_validator("password")
    @classmethod
    def fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        return v


class LoginIn(_EmailIn):
    password: str = Field(..., min_length=1, max_length=128)


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"


class SimpleOKOut(BaseModel):
    ok: bool = True


class CapabilitiesOut(BaseModel):
    can_use_portal: bool = False
    can_view_admin: bool = False
    can_manage_users: bool = False


class SessionOut(BaseModel):
    is_authenticated: bool
    user: UserRecord | None = None
    login_url: str
    capabilities: CapabilitiesOut = Field(default_factory=CapabilitiesOut)
