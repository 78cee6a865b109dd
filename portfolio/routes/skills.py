# portfolio/routes/skills.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from portfolio.crud import apply_changes, delete_or_404, get_or_404, save
from portfolio.database import get_db
from portfolio.deps import require_admin
from portfolio.models import Skill, SkillCategory, User
from portfolio.schemas.skills import SkillCreate, SkillOut, SkillPatch, SkillUpdate

router = APIRouter(prefix="/skills", tags=["Skills"])

NOT_FOUND = "Skill not found"
DUPLICATE = "This skill already exists in this category."


def _name_taken(db: Session, category_id: int, name: str, exclude_id: Optional[int] = None) -> bool:
    q = db.query(Skill.id).filter(Skill.skill_category_id == category_id, Skill.name == name)
    if exclude_id is not None:
        q = q.filter(Skill.id != exclude_id)
    return q.first() is not None


def _update(db: Session, skill_id: int, changes: Dict[str, Any]) -> Skill:
    skill = get_or_404(db, Skill, skill_id, NOT_FOUND)
    name = changes.get("name")
    if name and _name_taken(db, skill.skill_category_id, name, exclude_id=skill_id):
        raise HTTPException(status_code=409, detail=f"Another skill named '{name}' already exists in this category.")
    apply_changes(skill, changes)
    return save(db, skill, conflict=DUPLICATE)


@router.get("", response_model=List[SkillOut])
def list_skills(category_id: Optional[int] = Query(None, alias="categoryId"), db: Session = Depends(get_db)):
    q = db.query(Skill)
    if category_id is not None:
        q = q.filter(Skill.skill_category_id == category_id)
    # keep skills from the same category together
    return q.order_by(Skill.skill_category_id.asc(), Skill.order.asc(), Skill.id.asc()).all()


@router.get("/{skill_id}", response_model=SkillOut)
def get_skill(skill_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, Skill, skill_id, NOT_FOUND)


@router.post("", response_model=SkillOut, status_code=201)
def create_skill(body: SkillCreate, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    missing = f"Skill category with ID {body.skill_category_id} not found."
    if db.get(SkillCategory, body.skill_category_id) is None:
        raise HTTPException(status_code=404, detail=missing)
    if _name_taken(db, body.skill_category_id, body.name):
        raise HTTPException(status_code=409, detail=f"Skill '{body.name}' already exists in this category.")
    return save(db, Skill(**body.model_dump()), conflict=DUPLICATE, missing=missing)


@router.put("/{skill_id}", response_model=SkillOut)
def replace_skill(skill_id: int, body: SkillUpdate, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return _update(db, skill_id, body.model_dump())


@router.patch("/{skill_id}", response_model=SkillOut)
def patch_skill(skill_id: int, body: SkillPatch, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return _update(db, skill_id, body.model_dump(exclude_unset=True))


@router.delete("/{skill_id}")
def delete_skill(skill_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return delete_or_404(db, Skill, skill_id, NOT_FOUND, "Skill deleted successfully")
