# portfolio/routes/builder.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import update
from sqlalchemy.orm import Session

from portfolio.crud import commit_or_raise, save
from portfolio.database import get_db
from portfolio.deps import require_admin
from portfolio.models import BuilderData, Page, User
from portfolio.schemas.builder import BuilderDocument, BuilderResponse, BuilderSaveRequest

log = logging.getLogger("portfolio.builder")

router = APIRouter(prefix="/builder", tags=["Builder"])

STALE = "Builder document was modified by someone else."


def _response(row: BuilderData) -> BuilderResponse:
    return BuilderResponse(success=True, data=BuilderDocument.model_validate(row))


@router.get("/save", response_model=BuilderResponse)
def load_document(page_id: Optional[int] = Query(None, alias="pageId"), db: Session = Depends(get_db)):
    if page_id is None:
        raise HTTPException(status_code=400, detail="pageId query parameter is required")
    row = db.query(BuilderData).filter(BuilderData.page_id == page_id).first()
    if not row:
        raise HTTPException(status_code=404, detail="No builder data found for this page")
    return _response(row)


def _stale(current: int) -> HTTPException:
    return HTTPException(status_code=409, detail={"error": STALE, "currentVersion": current})


def update_document(
    db: Session,
    page_id: int,
    elements: List[Dict[str, Any]],
    theme: Dict[str, Any],
    expected_version: Optional[int] = None,
) -> bool:
    """
    Overwrite the stored document and bump its version in one UPDATE.

    With ``expected_version`` the row only matches while its version is
    unchanged, so a concurrent save in between leaves nothing to update and
    False is returned. The caller commits.
    """
    stmt = update(BuilderData).where(BuilderData.page_id == page_id)
    if expected_version is not None:
        stmt = stmt.where(BuilderData.version == expected_version)
    stmt = stmt.values(elements=elements, theme=theme, version=BuilderData.version + 1)
    result = db.execute(stmt.execution_options(synchronize_session=False))
    return result.rowcount == 1


@router.post("/save", response_model=BuilderResponse)
def save_document(body: BuilderSaveRequest, db: Session = Depends(get_db), user: User = Depends(require_admin)):
    """
    Upsert the whole canvas for a page.

    Without ``expectedVersion`` the last write wins. With it, the save is
    rejected (409) unless it matches the stored version (0 = no document yet).
    """
    if db.get(Page, body.page_id) is None:
        raise HTTPException(status_code=404, detail=f"Page with ID {body.page_id} not found.")

    row = db.query(BuilderData).filter(BuilderData.page_id == body.page_id).first()
    current = row.version if row else 0
    if body.expected_version is not None and body.expected_version != current:
        log.info("Stale builder save for page %s: expected=%s current=%s",
                 body.page_id, body.expected_version, current)
        raise _stale(current)

    elements = [el.model_dump(mode="json", by_alias=True) for el in body.elements]
    theme = body.theme.model_dump(mode="json", by_alias=True)

    if row is None:
        # a concurrent first save trips the unique page_id and maps to 409
        row = save(db, BuilderData(page_id=body.page_id, elements=elements, theme=theme, version=1), conflict=STALE)
    else:
        if not update_document(db, body.page_id, elements, theme, body.expected_version):
            db.rollback()
            latest = db.query(BuilderData.version).filter(BuilderData.page_id == body.page_id).scalar()
            log.info("Builder save for page %s lost the race: expected=%s now=%s",
                     body.page_id, body.expected_version, latest)
            raise _stale(latest or 0)
        commit_or_raise(db, conflict=STALE)
        db.refresh(row)

    log.info("Builder saved: page_id=%s version=%s by user=%s", row.page_id, row.version, user.id)
    return _response(row)
