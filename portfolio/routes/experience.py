# portfolio/routes/experience.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from portfolio.crud import apply_changes, delete_or_404, get_or_404, save
from portfolio.database import get_db
from portfolio.deps import require_admin
from portfolio.models import ExperienceComponent, Page, User
from portfolio.schemas.experience import ExperienceCreate, ExperienceOut, ExperiencePatch, ExperienceUpdate

log = logging.getLogger("portfolio.experience")

router = APIRouter(prefix="/experience", tags=["Experience"])

NOT_FOUND = "Experience not found"
DUPLICATE = "This experience entry already exists for this page."


def _duplicate(db: Session, page_id: int, job_title: str, company: str, exclude_id: Optional[int] = None) -> bool:
    q = db.query(ExperienceComponent.id).filter(
        ExperienceComponent.page_id == page_id,
        ExperienceComponent.job_title == job_title,
        ExperienceComponent.company == company,
    )
    if exclude_id is not None:
        q = q.filter(ExperienceComponent.id != exclude_id)
    return q.first() is not None


def _update(db: Session, experience_id: int, changes: Dict[str, Any]) -> ExperienceComponent:
    item = get_or_404(db, ExperienceComponent, experience_id, NOT_FOUND)
    job_title = changes.get("job_title", item.job_title)
    company = changes.get("company", item.company)
    # pageId never changes through this route
    if _duplicate(db, item.page_id, job_title, company, exclude_id=experience_id):
        raise HTTPException(status_code=409, detail="Another identical experience entry already exists on this page.")
    apply_changes(item, changes)
    item = save(db, item, conflict=DUPLICATE)
    log.info("Experience updated: id=%s", item.id)
    return item


@router.get("", response_model=List[ExperienceOut])
def list_experience(
    page_id: Optional[int] = Query(None, alias="pageId"),
    sort: Literal["order", "recent"] = Query("order"),
    db: Session = Depends(get_db),
):
    """
    sort=order  -> manual order ascending (default)
    sort=recent -> current roles first, then end date descending, then manual
                   order. Start date is not a tie-breaker; re-sort client-side
                   if that matters.
    """
    q = db.query(ExperienceComponent)
    if page_id is not None:
        q = q.filter(ExperienceComponent.page_id == page_id)
    if sort == "recent":
        q = q.order_by(
            ExperienceComponent.end_date.is_(None).desc(),
            ExperienceComponent.end_date.desc(),
            ExperienceComponent.order.asc(),
        )
    else:
        q = q.order_by(ExperienceComponent.order.asc(), ExperienceComponent.id.asc())
    return q.all()


@router.get("/{experience_id}", response_model=ExperienceOut)
def get_experience(experience_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, ExperienceComponent, experience_id, NOT_FOUND)


@router.post("", response_model=ExperienceOut, status_code=201)
def create_experience(body: ExperienceCreate, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    missing = f"Page with ID {body.page_id} not found."
    if db.get(Page, body.page_id) is None:
        raise HTTPException(status_code=404, detail=missing)
    if _duplicate(db, body.page_id, body.job_title, body.company):
        raise HTTPException(status_code=409, detail=DUPLICATE)

    item = save(db, ExperienceComponent(**body.model_dump()), conflict=DUPLICATE, missing=missing)
    log.info("Experience created: id=%s page_id=%s", item.id, item.page_id)
    return item


@router.put("/{experience_id}", response_model=ExperienceOut)
def replace_experience(
    experience_id: int,
    body: ExperienceUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return _update(db, experience_id, body.model_dump())


@router.patch("/{experience_id}", response_model=ExperienceOut)
def patch_experience(
    experience_id: int,
    body: ExperiencePatch,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return _update(db, experience_id, body.model_dump(exclude_unset=True))


@router.delete("/{experience_id}")
def delete_experience(experience_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return delete_or_404(db, ExperienceComponent, experience_id, NOT_FOUND, "Experience deleted successfully")
