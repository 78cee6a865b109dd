# portfolio/schemas/hero.py
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from portfolio.schemas.base import CamelModel, not_null


def _image_url(value: Optional[str]) -> Optional[str]:
    """Empty, absolute http(s) URL, or a site-relative path like /me.jpg."""
    if value is None or value == "":
        return value
    if value.startswith("/") or value.startswith("http://") or value.startswith("https://"):
        return value
    raise ValueError("Invalid URL")


class HeroFields(CamelModel):
    headline: Optional[str] = Field(None, max_length=300)
    subheadline: Optional[str] = Field(None, max_length=300)
    summary: Optional[str] = None
    cta_label: Optional[str] = Field(None, max_length=100)
    cta_link: Optional[str] = Field(None, max_length=500)
    resume_link_label: Optional[str] = Field(None, max_length=100)
    image_url: Optional[str] = Field(None, max_length=500)

    @field_validator("image_url")
    @classmethod
    def check_image_url(cls, value):
        return _image_url(value)


class HeroCreate(HeroFields):
    page_id: int
    order: int = Field(0, ge=0)


class HeroUpdate(HeroFields):
    """PUT: full replacement, omitted text fields are cleared."""
    order: int = Field(..., ge=0)


class HeroPatch(HeroFields):
    """PATCH: only the fields present in the body change."""
    order: Optional[int] = Field(None, ge=0)

    @field_validator("order")
    @classmethod
    def order_not_null(cls, value):
        return not_null(value)


class HeroOut(HeroFields):
    id: int
    page_id: int
    order: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
