# portfolio/routes/skill_categories.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, selectinload

from portfolio.crud import apply_changes, delete_or_404, get_or_404, save
from portfolio.database import get_db
from portfolio.deps import require_admin
from portfolio.models import SkillCategory, User
from portfolio.schemas.skills import SkillCategoryIn, SkillCategoryOut, SkillCategoryPatch, SkillCategoryWithSkills

router = APIRouter(prefix="/skill-categories", tags=["Skills"])

NOT_FOUND = "Skill category not found"
DUPLICATE = "A category with this name already exists."


def _name_taken(db: Session, name: str, exclude_id: Optional[int] = None) -> bool:
    q = db.query(SkillCategory.id).filter(SkillCategory.name == name)
    if exclude_id is not None:
        q = q.filter(SkillCategory.id != exclude_id)
    return q.first() is not None


def _update(db: Session, category_id: int, changes: Dict[str, Any]) -> SkillCategory:
    category = get_or_404(db, SkillCategory, category_id, NOT_FOUND)
    name = changes.get("name")
    if name and _name_taken(db, name, exclude_id=category_id):
        raise HTTPException(status_code=409, detail=f"Another category with name '{name}' already exists.")
    apply_changes(category, changes)
    return save(db, category, conflict=DUPLICATE)


@router.get("", response_model=Union[List[SkillCategoryWithSkills], List[SkillCategoryOut]])
def list_categories(
    include_skills: bool = Query(False, alias="includeSkills"),
    db: Session = Depends(get_db),
):
    q = db.query(SkillCategory).order_by(SkillCategory.order.asc(), SkillCategory.id.asc())
    if include_skills:
        rows = q.options(selectinload(SkillCategory.skills)).all()
        return [SkillCategoryWithSkills.model_validate(c) for c in rows]
    return [SkillCategoryOut.model_validate(c) for c in q.all()]


@router.get("/{category_id}", response_model=SkillCategoryWithSkills)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, SkillCategory, category_id, NOT_FOUND)


@router.post("", response_model=SkillCategoryOut, status_code=201)
def create_category(body: SkillCategoryIn, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    if _name_taken(db, body.name):
        raise HTTPException(status_code=409, detail=f"Category with name '{body.name}' already exists.")
    return save(db, SkillCategory(**body.model_dump()), conflict=DUPLICATE)


@router.put("/{category_id}", response_model=SkillCategoryOut)
def replace_category(
    category_id: int,
    body: SkillCategoryIn,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return _update(db, category_id, body.model_dump())


@router.patch("/{category_id}", response_model=SkillCategoryOut)
def patch_category(
    category_id: int,
    body: SkillCategoryPatch,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return _update(db, category_id, body.model_dump(exclude_unset=True))


@router.delete("/{category_id}")
def delete_category(category_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    # skills go with it (ORM cascade + ON DELETE CASCADE)
    return delete_or_404(db, SkillCategory, category_id, NOT_FOUND, "Skill category deleted successfully")
