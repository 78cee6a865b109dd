# portfolio/models.py
from __future__ import annotations

from sqlalchemy import (
    Column, Integer, String, Text, Date, DateTime, ForeignKey, Index, Boolean,
    UniqueConstraint, JSON,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func as sa_func

from sqlalchemy.ext.mutable import MutableList, MutableDict

from portfolio.database import Base


# =======================
# User model
# =======================
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    # Nullable: accounts without a local password can never log in with one
    password_hash = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default="USER", server_default="USER")  # ADMIN | USER

    created_at = Column(DateTime, nullable=False, server_default=sa_func.now())
    updated_at = Column(DateTime, nullable=False, server_default=sa_func.now(), onupdate=sa_func.now())

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role}>"


# =======================
# Page model
# =======================
class Page(Base):
    __tablename__ = "pages"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    slug = Column(String(200), unique=True, index=True, nullable=False)
    title = Column(String(200), nullable=False)
    is_published = Column(Boolean, nullable=False, default=False)
    about_content = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=sa_func.now())
    updated_at = Column(DateTime, nullable=False, server_default=sa_func.now(), onupdate=sa_func.now())

    # Relationships
    hero_components = relationship(
        "HeroComponent",
        back_populates="page",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="HeroComponent.order",
    )
    experience_components = relationship(
        "ExperienceComponent",
        back_populates="page",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ExperienceComponent.order",
    )
    education_components = relationship(
        "EducationComponent",
        back_populates="page",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="EducationComponent.order",
    )
    builder_data = relationship(
        "BuilderData",
        back_populates="page",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Page id={self.id} slug={self.slug!r}>"


# =======================
# Page components
# =======================
class HeroComponent(Base):
    __tablename__ = "hero_components"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    page_id = Column(Integer, ForeignKey("pages.id", ondelete="CASCADE"), index=True, nullable=False)
    order = Column(Integer, nullable=False, default=0)

    headline = Column(String(300), nullable=True)
    subheadline = Column(String(300), nullable=True)
    summary = Column(Text, nullable=True)
    cta_label = Column(String(100), nullable=True)
    cta_link = Column(String(500), nullable=True)
    resume_link_label = Column(String(100), nullable=True)
    image_url = Column(String(500), nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=sa_func.now())
    updated_at = Column(DateTime, nullable=False, server_default=sa_func.now(), onupdate=sa_func.now())

    page = relationship("Page", back_populates="hero_components")

    __table_args__ = (
        UniqueConstraint("page_id", "order", name="uq_hero_page_order"),
    )

    def __repr__(self) -> str:
        return f"<HeroComponent id={self.id} page_id={self.page_id} order={self.order}>"


class ExperienceComponent(Base):
    __tablename__ = "experience_components"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    page_id = Column(Integer, ForeignKey("pages.id", ondelete="CASCADE"), index=True, nullable=False)
    order = Column(Integer, nullable=False, default=0)

    job_title = Column(String(200), nullable=False)
    company = Column(String(200), nullable=False)
    location = Column(String(200), nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)          # NULL = current role
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=sa_func.now())
    updated_at = Column(DateTime, nullable=False, server_default=sa_func.now(), onupdate=sa_func.now())

    page = relationship("Page", back_populates="experience_components")

    __table_args__ = (
        UniqueConstraint("page_id", "job_title", "company", name="uq_experience_page_title_company"),
        Index("ix_experience_page_order", "page_id", "order"),
    )

    def __repr__(self) -> str:
        return f"<ExperienceComponent id={self.id} job_title={self.job_title!r} company={self.company!r}>"


class EducationComponent(Base):
    __tablename__ = "education_components"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    page_id = Column(Integer, ForeignKey("pages.id", ondelete="CASCADE"), index=True, nullable=False)
    order = Column(Integer, nullable=False, default=0)

    institution = Column(String(200), nullable=False)
    degree = Column(String(200), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=sa_func.now())
    updated_at = Column(DateTime, nullable=False, server_default=sa_func.now(), onupdate=sa_func.now())

    page = relationship("Page", back_populates="education_components")

    __table_args__ = (
        UniqueConstraint("page_id", "institution", "degree", name="uq_education_page_institution_degree"),
        Index("ix_education_page_order", "page_id", "order"),
    )

    def __repr__(self) -> str:
        return f"<EducationComponent id={self.id} institution={self.institution!r} degree={self.degree!r}>"


# =======================
# Skills
# =======================
class SkillCategory(Base):
    __tablename__ = "skill_categories"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    order = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, server_default=sa_func.now())
    updated_at = Column(DateTime, nullable=False, server_default=sa_func.now(), onupdate=sa_func.now())

    skills = relationship(
        "Skill",
        back_populates="category",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Skill.order",
    )

    def __repr__(self) -> str:
        return f"<SkillCategory id={self.id} name={self.name!r}>"


class Skill(Base):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    skill_category_id = Column(
        Integer, ForeignKey("skill_categories.id", ondelete="CASCADE"), index=True, nullable=False
    )
    name = Column(String(100), nullable=False)
    order = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, server_default=sa_func.now())
    updated_at = Column(DateTime, nullable=False, server_default=sa_func.now(), onupdate=sa_func.now())

    category = relationship("SkillCategory", back_populates="skills")

    __table_args__ = (
        UniqueConstraint("skill_category_id", "name", name="uq_skill_category_name"),
    )

    def __repr__(self) -> str:
        return f"<Skill id={self.id} name={self.name!r}>"


# =======================
# Visual builder document
# =======================
class BuilderData(Base):
    __tablename__ = "builder_data"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    page_id = Column(Integer, ForeignKey("pages.id", ondelete="CASCADE"), unique=True, index=True, nullable=False)

    elements = Column(MutableList.as_mutable(JSON), nullable=False, default=list)
    theme = Column(MutableDict.as_mutable(JSON), nullable=False, default=dict)
    # bumped on every save; clients may send it back as expectedVersion
    version = Column(Integer, nullable=False, default=1, server_default="1")

    created_at = Column(DateTime, nullable=False, server_default=sa_func.now())
    updated_at = Column(DateTime, nullable=False, server_default=sa_func.now(), onupdate=sa_func.now())

    page = relationship("Page", back_populates="builder_data")

    def __repr__(self) -> str:
        return f"<BuilderData id={self.id} page_id={self.page_id} version={self.version}>"
