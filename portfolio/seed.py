# portfolio/seed.py
"""
Idempotent demo content.

    python -m portfolio.seed

Rows are matched on their natural keys (email, slug, name, ...) so running
this twice leaves the database unchanged.
"""
import logging
from datetime import date

from portfolio.config import ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_ROLE
from portfolio.database import Base, SessionLocal, engine
from portfolio.models import (
    EducationComponent,
    ExperienceComponent,
    HeroComponent,
    Page,
    Skill,
    SkillCategory,
    User,
)
from portfolio.security import hash_password, normalize_email

log = logging.getLogger("portfolio.seed")

EXPERIENCE = [
    {
        "order": 0,
        "job_title": "Senior Software Engineer",
        "company": "Tech Innovations Inc.",
        "location": "Remote",
        "start_date": date(2021, 1, 1),
        "end_date": None,
        "description": "Leading the web platform team and mentoring junior engineers.",
    },
    {
        "order": 1,
        "job_title": "Software Developer",
        "company": "Digital Solutions Co.",
        "location": "New York, NY",
        "start_date": date(2018, 6, 1),
        "end_date": date(2020, 12, 31),
        "description": "Built customer-facing dashboards and internal tooling.",
    },
]

SKILLS = {
    "Frontend": ["React", "TypeScript", "CSS"],
    "Backend": ["Python", "PostgreSQL", "REST APIs"],
}


def seed_admin(db) -> User:
    email = normalize_email(ADMIN_EMAIL)
    user = db.query(User).filter_by(email=email).first()
    if user:
        log.info("User %s already exists.", email)
        if user.role != ADMIN_ROLE:
            user.role = ADMIN_ROLE
        return user
    user = User(email=email, name="Admin", password_hash=hash_password(ADMIN_PASSWORD), role=ADMIN_ROLE)
    db.add(user)
    log.info("Seeded admin user %s", email)
    return user


def seed_home(db) -> Page:
    page = db.query(Page).filter_by(slug="home").first()
    if not page:
        page = Page(
            slug="home",
            title="Home",
            is_published=True,
            about_content="Full-stack developer who enjoys building tidy, fast web products.",
        )
        db.add(page)
        db.flush()

    if not db.query(HeroComponent).filter_by(page_id=page.id, order=0).first():
        db.add(HeroComponent(
            page_id=page.id,
            order=0,
            headline="Hi, I'm a Full-Stack Developer",
            subheadline="I build things for the web.",
            summary="Ten years of shipping products end to end.",
            cta_label="Contact me",
            cta_link="mailto:" + normalize_email(ADMIN_EMAIL),
            resume_link_label="Resume",
        ))

    for row in EXPERIENCE:
        exists = db.query(ExperienceComponent).filter_by(
            page_id=page.id, job_title=row["job_title"], company=row["company"]
        ).first()
        if not exists:
            db.add(ExperienceComponent(page_id=page.id, **row))

    if not db.query(EducationComponent).filter_by(
        page_id=page.id, institution="State University", degree="B.Sc. Computer Science"
    ).first():
        db.add(EducationComponent(
            page_id=page.id,
            order=0,
            institution="State University",
            degree="B.Sc. Computer Science",
            start_date=date(2014, 9, 1),
            end_date=date(2018, 5, 31),
        ))
    return page


def seed_skills(db) -> None:
    for cat_order, (name, skills) in enumerate(SKILLS.items()):
        category = db.query(SkillCategory).filter_by(name=name).first()
        if not category:
            category = SkillCategory(name=name, order=cat_order)
            db.add(category)
            db.flush()
        for order, skill in enumerate(skills):
            if not db.query(Skill).filter_by(skill_category_id=category.id, name=skill).first():
                db.add(Skill(skill_category_id=category.id, name=skill, order=order))


def run() -> None:
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_admin(db)
        seed_home(db)
        seed_skills(db)
        db.commit()
        log.info("Seed complete.")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    run()
