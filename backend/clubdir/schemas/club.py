from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


CLUB_CATEGORIES = (
    "Academic",
    "Arts & Culture",
    "Community Service",
    "Gaming & Esports",
    "Health & Wellness",
    "Political & Advocacy",
    "Professional",
    "Recreation & Sports",
    "Religious & Spiritual",
    "Social",
    "Other",
)
ALL_CATEGORIES = "All Categories"

ClubCategory = Literal[
    "Academic",
    "Arts & Culture",
    "Community Service",
    "Gaming & Esports",
    "Health & Wellness",
    "Political & Advocacy",
    "Professional",
    "Recreation & Sports",
    "Religious & Spiritual",
    "Social",
    "Other",
]

_REQUIRED_TEXT = ("name", "description", "contact_email")
_OPTIONAL_TEXT = (
    "category",
    "logo_url",
    "contact_name",
    "website_link",
    "instagram_link",
    "discord_link",
    "calendar_link",
    "other_social_links",
)

# Labels shown on the profile page, in display order
SOCIAL_LINK_FIELDS = (
    ("Website", "website_link"),
    ("Instagram", "instagram_link"),
    ("Discord", "discord_link"),
    ("Calendar", "calendar_link"),
)


def looks_like_email(value: str) -> bool:
    v = value.strip()
    return "@" in v and "." in v.split("@")[-1]


def _strip(value):
    if isinstance(value, str):
        return value.strip()
    return value


def _blank_to_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _normalize_email(value):
    if value is None:
        return value
    v = value.strip().lower()
    if not looks_like_email(v):
        raise ValueError("Invalid email")
    return v


class ClubFieldsBase(BaseModel):
    @field_validator("name", "description", mode="before", check_fields=False)
    @classmethod
    def strip_required(cls, v):
        return _strip(v)

    @field_validator(*_OPTIONAL_TEXT, mode="before", check_fields=False)
    @classmethod
    def blank_optional(cls, v):
        return _blank_to_none(v)

    @field_validator("contact_email", check_fields=False)
    @classmethod
    def normalize_contact_email(cls, v):
        return _normalize_email(v)


class ClubCreateIn(ClubFieldsBase):
    name: str = Field(..., min_length=1, max_length=160, examples=["UCSC Robotics Club"])
    description: str = Field(..., min_length=1, max_length=5000)
    category: ClubCategory | None = None
    logo_url: str | None = Field(default=None, max_length=2048)
    contact_name: str | None = Field(default=None, max_length=160)
    contact_email: str = Field(..., min_length=3, max_length=320, examples=["club@ucsc.edu"])
    website_link: str | None = Field(default=None, max_length=2048)
    instagram_link: str | None = Field(default=None, max_length=2048)
    discord_link: str | None = Field(default=None, max_length=2048)
    calendar_link: str | None = Field(default=None, max_length=2048)
    other_social_links: str | None = Field(default=None, max_length=5000)


class ClubUpdateIn(ClubFieldsBase):
    """Partial edit; only the fields present in the body are written."""

    name: str | None = Field(default=None, min_length=1, max_length=160)
    description: str | None = Field(default=None, min_length=1, max_length=5000)
    category: ClubCategory | None = None
    logo_url: str | None = Field(default=None, max_length=2048)
    contact_name: str | None = Field(default=None, max_length=160)
    contact_email: str | None = Field(default=None, min_length=3, max_length=320)
    website_link: str | None = Field(default=None, max_length=2048)
    instagram_link: str | None = Field(default=None, max_length=2048)
    discord_link: str | None = Field(default=None, max_length=2048)
    calendar_link: str | None = Field(default=None, max_length=2048)
    other_social_links: str | None = Field(default=None, max_length=5000)

    @model_validator(mode="after")
    def required_fields_not_cleared(self):
        for field in _REQUIRED_TEXT:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be empty")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ClubRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str
    category: str | None = None
    logo_url: str | None = None
    contact_name: str | None = None
    contact_email: str
    website_link: str | None = None
    instagram_link: str | None = None
    discord_link: str | None = None
    calendar_link: str | None = None
    other_social_links: str | None = None
    owner_email: str
    is_active: bool = True
    created_date: datetime
    updated_date: datetime

    @field_validator("id", mode="before")
    @classmethod
    def id_as_text(cls, v):
        return str(v)


class SocialLinkOut(BaseModel):
    label: str
    url: str


class ClubProfileOut(ClubRecord):
    social_links: list[SocialLinkOut] = Field(default_factory=list)
    other_links: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, club: ClubRecord) -> "ClubProfileOut":
        social_links = [
            SocialLinkOut(label=label, url=getattr(club, field))
            for label, field in SOCIAL_LINK_FIELDS
            if getattr(club, field)
        ]
        other_links = [line.strip() for line in (club.other_social_links or "").splitlines() if line.strip()]
        return cls(**club.model_dump(), social_links=social_links, other_links=other_links)


class ClubDirectoryOut(BaseModel):
    rows: list[ClubRecord] = Field(default_factory=list)
    count: int
    q: str = ""
    category: str = ALL_CATEGORIES


class CategoryListOut(BaseModel):
    all_value: str = ALL_CATEGORIES
    categories: list[str] = Field(default_factory=lambda: list(CLUB_CATEGORIES))
