# portfolio/schemas/pages.py
import re
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from portfolio.schemas.base import CamelModel, not_null
from portfolio.schemas.education import EducationOut
from portfolio.schemas.experience import ExperienceOut
from portfolio.schemas.hero import HeroOut

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def _slug(value: Optional[str]) -> Optional[str]:
    if value is not None and not SLUG_RE.match(value):
        raise ValueError("Slug may only contain lowercase letters, digits and single hyphens")
    return value


class PageCreate(CamelModel):
    slug: str = Field(..., min_length=1, max_length=200)
    title: str = Field(..., min_length=1, max_length=200)
    is_published: bool = False
    about_content: Optional[str] = None

    @field_validator("slug")
    @classmethod
    def check_slug(cls, value):
        return _slug(value)


class PagePatch(CamelModel):
    slug: Optional[str] = Field(None, min_length=1, max_length=200)
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    is_published: Optional[bool] = None
    about_content: Optional[str] = None

    @field_validator("slug", "title", "is_published")
    @classmethod
    def required_columns_not_null(cls, value):
        return not_null(value)

    @field_validator("slug")
    @classmethod
    def check_slug(cls, value):
        return _slug(value)


class PageSummary(CamelModel):
    id: int
    slug: str
    title: str
    is_published: bool


class PageOut(PageCreate):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PageDetail(PageOut):
    hero_components: List[HeroOut] = Field(default_factory=list)
    experience_components: List[ExperienceOut] = Field(default_factory=list)
    education_components: List[EducationOut] = Field(default_factory=list)
