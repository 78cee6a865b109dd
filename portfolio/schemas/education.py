# portfolio/schemas/education.py
from datetime import date, datetime
from typing import Optional

from pydantic import Field, field_validator

from portfolio.schemas.base import CamelModel, not_null


class EducationUpdate(CamelModel):
    order: int = Field(..., ge=0)
    institution: str = Field(..., min_length=1, max_length=200)
    degree: str = Field(..., min_length=1, max_length=200)
    start_date: date
    end_date: Optional[date] = None
    description: Optional[str] = None


class EducationCreate(EducationUpdate):
    page_id: int


class EducationPatch(CamelModel):
    order: Optional[int] = Field(None, ge=0)
    institution: Optional[str] = Field(None, min_length=1, max_length=200)
    degree: Optional[str] = Field(None, min_length=1, max_length=200)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    description: Optional[str] = None

    @field_validator("order", "institution", "degree", "start_date")
    @classmethod
    def required_columns_not_null(cls, value):
        return not_null(value)


class EducationOut(EducationUpdate):
    id: int
    page_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
