# portfolio/routes/site.py
"""Server-rendered portfolio pages, builder previews and the admin console shell."""
import logging
import re
from pathlib import Path
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session, selectinload

from portfolio.config import CONTACT_EMAIL
from portfolio.database import get_db
from portfolio.models import BuilderData, Page, SkillCategory
from portfolio.schemas.builder import BuilderDocument

log = logging.getLogger("portfolio.site")

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

HOME_SLUG = "home"

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def inline_style(styles: Optional[Dict[str, str]]) -> str:
    """``{"backgroundColor": "#fff"}`` -> ``"background-color: #fff"``."""
    if not styles:
        return ""
    return "; ".join(
        f"{_CAMEL_BOUNDARY.sub('-', key).lower()}: {value}"
        for key, value in styles.items()
        if value not in (None, "")
    )


templates.env.filters["inline_style"] = inline_style

router = APIRouter(tags=["Site"], include_in_schema=False)


def _published(db: Session, slug: str, *options) -> Optional[Page]:
    return (
        db.query(Page)
        .options(*options)
        .filter(Page.slug == slug, Page.is_published.is_(True))
        .first()
    )


def _not_found(request: Request, slug: str) -> HTMLResponse:
    return templates.TemplateResponse(request, "not_found.html", {"slug": slug}, status_code=404)


def _render_page(request: Request, db: Session, slug: str) -> HTMLResponse:
    page = _published(
        db,
        slug,
        selectinload(Page.hero_components),
        selectinload(Page.experience_components),
        selectinload(Page.education_components),
    )
    if not page:
        log.info("No published page for slug %r", slug)
        return _not_found(request, slug)

    categories = (
        db.query(SkillCategory)
        .options(selectinload(SkillCategory.skills))
        .order_by(SkillCategory.order.asc(), SkillCategory.id.asc())
        .all()
    )
    return templates.TemplateResponse(
        request,
        "page.html",
        {
            "page": page,
            "hero": page.hero_components[0] if page.hero_components else None,
            "experience": page.experience_components,
            "education": page.education_components,
            "categories": categories,
            "contact_email": CONTACT_EMAIL,
        },
    )


@router.get("/", response_class=HTMLResponse)
def home(request: Request, db: Session = Depends(get_db)):
    return _render_page(request, db, HOME_SLUG)


@router.get("/p/{slug}", response_class=HTMLResponse)
def page_by_slug(slug: str, request: Request, db: Session = Depends(get_db)):
    return _render_page(request, db, slug)


@router.get("/p/{slug}/preview", response_class=HTMLResponse)
def builder_preview(slug: str, request: Request, db: Session = Depends(get_db)):
    """Render the saved builder canvas of a published page with its theme applied."""
    page = _published(db, slug)
    row = None
    if page:
        row = db.query(BuilderData).filter(BuilderData.page_id == page.id).first()
    if row is None:
        log.info("Nothing to preview for slug %r", slug)
        return _not_found(request, slug)

    document = BuilderDocument.model_validate(row)
    return templates.TemplateResponse(
        request,
        "preview.html",
        {"page": page, "elements": document.elements, "theme": document.theme, "version": document.version},
    )


@router.get("/admin", response_class=HTMLResponse)
def admin_console(request: Request):
    # data is fetched client-side through /api with the bearer token
    return templates.TemplateResponse(request, "admin.html", {})
