# portfolio/crud.py
from __future__ import annotations

import logging
from typing import Any, Dict, Type, TypeVar

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from portfolio.database import Base
from portfolio.errors import FOREIGN_KEY_VIOLATION, UNIQUE_VIOLATION, classify_integrity_error

log = logging.getLogger("portfolio.crud")

M = TypeVar("M", bound=Base)


def get_or_404(db: Session, model: Type[M], obj_id: int, detail: str) -> M:
    obj = db.get(model, obj_id)
    if obj is None:
        raise HTTPException(status_code=404, detail=detail)
    return obj


def apply_changes(obj: Any, changes: Dict[str, Any]) -> Any:
    for field, value in changes.items():
        setattr(obj, field, value)
    return obj


def commit_or_raise(db: Session, conflict: str, missing: str = "Referenced record not found") -> None:
    """
    Commit, mapping constraint violations raised by the database itself
    (e.g. a concurrent insert that won the race) to 409 / 404.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        kind = classify_integrity_error(e)
        log.info("Commit rejected by constraint (%s): %s", kind, e.orig)
        if kind == UNIQUE_VIOLATION:
            raise HTTPException(status_code=409, detail=conflict)
        if kind == FOREIGN_KEY_VIOLATION:
            raise HTTPException(status_code=404, detail=missing)
        raise


def save(db: Session, obj: M, conflict: str, missing: str = "Referenced record not found") -> M:
    db.add(obj)
    commit_or_raise(db, conflict=conflict, missing=missing)
    db.refresh(obj)
    return obj


def delete_or_404(db: Session, model: Type[M], obj_id: int, not_found: str, message: str) -> Dict[str, str]:
    obj = get_or_404(db, model, obj_id, not_found)
    db.delete(obj)
    db.commit()
    log.info("Deleted %s id=%s", model.__name__, obj_id)
    return {"message": message}
