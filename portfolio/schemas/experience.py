# portfolio/schemas/experience.py
from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator

from portfolio.schemas.base import CamelModel, not_null


class ExperienceUpdate(CamelModel):
    order: int = Field(..., ge=0)
    job_title: str = Field(..., min_length=1, max_length=200)
    company: str = Field(..., min_length=1, max_length=200)
    location: Optional[str] = Field(None, max_length=200)
    start_date: date
    end_date: Optional[date] = None     # omitted/null for a current role
    description: Optional[str] = None


class ExperienceCreate(ExperienceUpdate):
    page_id: int


class ExperiencePatch(CamelModel):
    order: Optional[int] = Field(None, ge=0)
    job_title: Optional[str] = Field(None, min_length=1, max_length=200)
    company: Optional[str] = Field(None, min_length=1, max_length=200)
    location: Optional[str] = Field(None, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None

    @field_validator("order", "job_title", "company", "start_date")
    @classmethod
    def required_columns_not_null(cls, value):
        return not_null(value)


class ExperienceOut(ExperienceUpdate):
    id: int
    page_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
