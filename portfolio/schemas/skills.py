# portfolio/schemas/skills.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from portfolio.schemas.base import CamelModel, not_null


# ---- Categories ----
class SkillCategoryIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    order: int = Field(..., ge=0)


class SkillCategoryPatch(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    order: Optional[int] = Field(None, ge=0)

    @field_validator("name", "order")
    @classmethod
    def required_columns_not_null(cls, value):
        return not_null(value)


class SkillCategoryOut(SkillCategoryIn):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---- Skills ----
class SkillUpdate(CamelModel):
    # category moves are not supported; delete and re-create instead
    name: str = Field(..., min_length=1, max_length=100)
    order: int = Field(..., ge=0)


class SkillCreate(SkillUpdate):
    skill_category_id: int


class SkillPatch(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    order: Optional[int] = Field(None, ge=0)

    @field_validator("name", "order")
    @classmethod
    def required_columns_not_null(cls, value):
        return not_null(value)


class SkillOut(SkillUpdate):
    id: int
    skill_category_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SkillCategoryWithSkills(SkillCategoryOut):
    # required so a bare category never reads as one with an empty skill list
    skills: List[SkillOut]
