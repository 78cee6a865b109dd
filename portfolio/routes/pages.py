# portfolio/routes/pages.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session, selectinload

from portfolio.crud import apply_changes, delete_or_404, get_or_404, save
from portfolio.database import get_db
from portfolio.deps import get_optional_user, require_admin
from portfolio.models import Page, User
from portfolio.schemas.pages import PageCreate, PageDetail, PageOut, PagePatch, PageSummary

log = logging.getLogger("portfolio.pages")

router = APIRouter(prefix="/pages", tags=["Pages"])


# ---- Helpers ----
def _slug_taken(db: Session, slug: str, exclude_id: Optional[int] = None) -> bool:
    q = db.query(Page.id).filter(Page.slug == slug)
    if exclude_id is not None:
        q = q.filter(Page.id != exclude_id)
    return q.first() is not None


def _update(db: Session, page_id: int, changes: Dict[str, Any]) -> Page:
    page = get_or_404(db, Page, page_id, "Page not found")
    slug = changes.get("slug")
    if slug and _slug_taken(db, slug, exclude_id=page_id):
        raise HTTPException(status_code=409, detail=f"Page with slug '{slug}' already exists.")
    apply_changes(page, changes)
    return save(db, page, conflict="A page with this slug already exists.")


# ---- Routes ----
@router.get("", response_model=List[PageSummary])
def list_pages(db: Session = Depends(get_db), user: Optional[User] = Depends(get_optional_user)):
    """Pages for admin selection; anonymous callers only see published ones."""
    q = db.query(Page)
    if user is None:
        q = q.filter(Page.is_published.is_(True))
    return q.order_by(Page.title.asc()).all()


@router.get("/{slug}", response_model=PageDetail)
def get_page(slug: str, db: Session = Depends(get_db), user: Optional[User] = Depends(get_optional_user)):
    page = (
        db.query(Page)
        .options(
            selectinload(Page.hero_components),
            selectinload(Page.experience_components),
            selectinload(Page.education_components),
        )
        .filter(Page.slug == slug)
        .first()
    )
    if not page or (user is None and not page.is_published):
        log.info("Page not found for slug %r", slug)
        raise HTTPException(status_code=404, detail={"message": f"Page with slug '{slug}' not found"})
    return page


@router.post("", response_model=PageOut, status_code=201)
def create_page(body: PageCreate, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    if _slug_taken(db, body.slug):
        raise HTTPException(status_code=409, detail=f"Page with slug '{body.slug}' already exists.")
    page = Page(**body.model_dump())
    return save(db, page, conflict="A page with this slug already exists.")


@router.put("/{page_id}", response_model=PageOut)
def replace_page(page_id: int, body: PageCreate, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return _update(db, page_id, body.model_dump())


@router.patch("/{page_id}", response_model=PageOut)
def patch_page(page_id: int, body: PagePatch, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return _update(db, page_id, body.model_dump(exclude_unset=True))


@router.delete("/{page_id}")
def delete_page(page_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    """Deleting a page removes its components and builder document too."""
    return delete_or_404(db, Page, page_id, "Page not found", "Page deleted successfully")
