# portfolio/routes/hero.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from portfolio.crud import apply_changes, delete_or_404, get_or_404, save
from portfolio.database import get_db
from portfolio.deps import require_admin
from portfolio.models import HeroComponent, Page, User
from portfolio.schemas.hero import HeroCreate, HeroOut, HeroPatch, HeroUpdate

router = APIRouter(prefix="/hero", tags=["Hero"])

NOT_FOUND = "Hero component not found"
DUPLICATE = "A hero component with this order already exists on this page."


def _order_taken(db: Session, page_id: int, order: int, exclude_id: Optional[int] = None) -> bool:
    q = db.query(HeroComponent.id).filter(HeroComponent.page_id == page_id, HeroComponent.order == order)
    if exclude_id is not None:
        q = q.filter(HeroComponent.id != exclude_id)
    return q.first() is not None


def _update(db: Session, hero_id: int, changes: Dict[str, Any]) -> HeroComponent:
    hero = get_or_404(db, HeroComponent, hero_id, NOT_FOUND)
    if "order" in changes and _order_taken(db, hero.page_id, changes["order"], exclude_id=hero_id):
        raise HTTPException(status_code=409, detail=DUPLICATE)
    apply_changes(hero, changes)
    return save(db, hero, conflict=DUPLICATE)


@router.get("", response_model=List[HeroOut])
def list_hero(page_id: Optional[int] = Query(None, alias="pageId"), db: Session = Depends(get_db)):
    q = db.query(HeroComponent)
    if page_id is not None:
        q = q.filter(HeroComponent.page_id == page_id)
    return q.order_by(HeroComponent.order.asc(), HeroComponent.id.asc()).all()


@router.get("/{hero_id}", response_model=HeroOut)
def get_hero(hero_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, HeroComponent, hero_id, NOT_FOUND)


@router.post("", response_model=HeroOut, status_code=201)
def create_hero(body: HeroCreate, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    if db.get(Page, body.page_id) is None:
        raise HTTPException(status_code=404, detail=f"Page with ID {body.page_id} not found.")
    if _order_taken(db, body.page_id, body.order):
        raise HTTPException(status_code=409, detail=DUPLICATE)
    hero = HeroComponent(**body.model_dump())
    return save(db, hero, conflict=DUPLICATE, missing=f"Page with ID {body.page_id} not found.")


@router.put("/{hero_id}", response_model=HeroOut)
def replace_hero(hero_id: int, body: HeroUpdate, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return _update(db, hero_id, body.model_dump())


@router.patch("/{hero_id}", response_model=HeroOut)
def patch_hero(hero_id: int, body: HeroPatch, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return _update(db, hero_id, body.model_dump(exclude_unset=True))


@router.delete("/{hero_id}")
def delete_hero(hero_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return delete_or_404(db, HeroComponent, hero_id, NOT_FOUND, "Hero component deleted successfully")
