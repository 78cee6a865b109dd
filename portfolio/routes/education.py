# portfolio/routes/education.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from portfolio.crud import apply_changes, delete_or_404, get_or_404, save
from portfolio.database import get_db
from portfolio.deps import require_admin
from portfolio.models import EducationComponent, Page, User
from portfolio.schemas.education import EducationCreate, EducationOut, EducationPatch, EducationUpdate

router = APIRouter(prefix="/education", tags=["Education"])

NOT_FOUND = "Education entry not found"
DUPLICATE = "This education entry already exists for this page."


def _duplicate(db: Session, page_id: int, institution: str, degree: str, exclude_id: Optional[int] = None) -> bool:
    q = db.query(EducationComponent.id).filter(
        EducationComponent.page_id == page_id,
        EducationComponent.institution == institution,
        EducationComponent.degree == degree,
    )
    if exclude_id is not None:
        q = q.filter(EducationComponent.id != exclude_id)
    return q.first() is not None


def _update(db: Session, education_id: int, changes: Dict[str, Any]) -> EducationComponent:
    item = get_or_404(db, EducationComponent, education_id, NOT_FOUND)
    institution = changes.get("institution", item.institution)
    degree = changes.get("degree", item.degree)
    if _duplicate(db, item.page_id, institution, degree, exclude_id=education_id):
        raise HTTPException(status_code=409, detail="Another identical education entry already exists on this page.")
    apply_changes(item, changes)
    return save(db, item, conflict=DUPLICATE)


@router.get("", response_model=List[EducationOut])
def list_education(page_id: Optional[int] = Query(None, alias="pageId"), db: Session = Depends(get_db)):
    # public page rendering always knows its page; refuse unscoped dumps
    if page_id is None:
        raise HTTPException(status_code=400, detail="pageId query parameter is required")
    return (
        db.query(EducationComponent)
        .filter(EducationComponent.page_id == page_id)
        .order_by(EducationComponent.order.asc(), EducationComponent.id.asc())
        .all()
    )


@router.get("/{education_id}", response_model=EducationOut)
def get_education(education_id: int, db: Session = Depends(get_db)):
    return get_or_404(db, EducationComponent, education_id, NOT_FOUND)


@router.post("", response_model=EducationOut, status_code=201)
def create_education(body: EducationCreate, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    missing = f"Page with ID {body.page_id} not found."
    if db.get(Page, body.page_id) is None:
        raise HTTPException(status_code=404, detail=missing)
    if _duplicate(db, body.page_id, body.institution, body.degree):
        raise HTTPException(status_code=409, detail=DUPLICATE)
    return save(db, EducationComponent(**body.model_dump()), conflict=DUPLICATE, missing=missing)


@router.put("/{education_id}", response_model=EducationOut)
def replace_education(
    education_id: int,
    body: EducationUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return _update(db, education_id, body.model_dump())


@router.patch("/{education_id}", response_model=EducationOut)
def patch_education(
    education_id: int,
    body: EducationPatch,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return _update(db, education_id, body.model_dump(exclude_unset=True))


@router.delete("/{education_id}")
def delete_education(education_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return delete_or_404(db, EducationComponent, education_id, NOT_FOUND, "Education entry deleted successfully")
