# portfolio/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from portfolio.config import ALLOWED_ORIGINS, AUTO_MIGRATE, ENV

# -----------
# Logging
# -----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("portfolio")

# ----------------------------------------
# DB metadata (DEV ONLY: auto-create tables)
# ----------------------------------------
from portfolio.database import Base, engine  # noqa: E402
from portfolio import models  # noqa: F401,E402

if ENV == "dev" or AUTO_MIGRATE:
    Base.metadata.create_all(bind=engine)

# -----------
# Routers
# -----------
from portfolio.errors import install_exception_handlers  # noqa: E402
from portfolio.routes import (  # noqa: E402
    auth,
    builder,
    education,
    experience,
    hero,
    pages,
    site,
    skill_categories,
    skills,
    upload,
)

app = FastAPI(
    title="Portfolio CMS API",
    version="1.0.0",
    description="Portfolio pages, admin content editing and the visual page builder",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,          # must be explicit when credentials=True
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],                    # includes Authorization, Content-Type, etc.
    expose_headers=["Content-Type", "Authorization"],
    max_age=600,
)

install_exception_handlers(app)


# ------------------------------------------------
# Log auth header presence
# ------------------------------------------------
@app.middleware("http")
async def log_auth_header(request: Request, call_next):
    auth_present = bool(request.headers.get("authorization"))
    log.info("REQ %s %s  Auth? %s", request.method, request.url.path, auth_present)
    return await call_next(request)


# ------------------------------------------------
# Mount routers
# ------------------------------------------------
for module in (auth, pages, hero, experience, education, skill_categories, skills, upload, builder):
    app.include_router(module.router, prefix="/api")

# HTML pages live at the root: /, /p/{slug}, /admin
app.include_router(site.router)


@app.get("/health")
def health():
    return {"status": "ok", "env": ENV}


@app.on_event("startup")
async def list_routes():
    if ENV != "dev":
        return
    log.info("ENV=%s AUTO_MIGRATE=%s", ENV, AUTO_MIGRATE)
    for r in app.routes:
        if isinstance(r, APIRoute):
            methods = ",".join(sorted(r.methods))
            log.info("%-10s %-35s -> %s.%s", methods, r.path, r.endpoint.__module__, r.endpoint.__name__)
