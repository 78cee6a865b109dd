"""initial portfolio schema

Revision ID: 3f1a9c2d7b10
Revises:
Create Date: 2026-10-19 10:12:31.204118
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "3f1a9c2d7b10"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("role", sa.String(length=20), server_default="USER", nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "pages",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("slug", sa.String(length=200), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("is_published", sa.Boolean(), nullable=False),
        sa.Column("about_content", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_pages_id", "pages", ["id"])
    op.create_index("ix_pages_slug", "pages", ["slug"], unique=True)

    op.create_table(
        "hero_components",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("page_id", sa.Integer(), sa.ForeignKey("pages.id", ondelete="CASCADE"), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("headline", sa.String(length=300), nullable=True),
        sa.Column("subheadline", sa.String(length=300), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("cta_label", sa.String(length=100), nullable=True),
        sa.Column("cta_link", sa.String(length=500), nullable=True),
        sa.Column("resume_link_label", sa.String(length=100), nullable=True),
        sa.Column("image_url", sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("page_id", "order", name="uq_hero_page_order"),
    )
    op.create_index("ix_hero_components_id", "hero_components", ["id"])
    op.create_index("ix_hero_components_page_id", "hero_components", ["page_id"])

    op.create_table(
        "experience_components",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("page_id", sa.Integer(), sa.ForeignKey("pages.id", ondelete="CASCADE"), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("job_title", sa.String(length=200), nullable=False),
        sa.Column("company", sa.String(length=200), nullable=False),
        sa.Column("location", sa.String(length=200), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("page_id", "job_title", "company", name="uq_experience_page_title_company"),
    )
    op.create_index("ix_experience_components_id", "experience_components", ["id"])
    op.create_index("ix_experience_components_page_id", "experience_components", ["page_id"])
    op.create_index("ix_experience_page_order", "experience_components", ["page_id", "order"])

    op.create_table(
        "education_components",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("page_id", sa.Integer(), sa.ForeignKey("pages.id", ondelete="CASCADE"), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("institution", sa.String(length=200), nullable=False),
        sa.Column("degree", sa.String(length=200), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("page_id", "institution", "degree", name="uq_education_page_institution_degree"),
    )
    op.create_index("ix_education_components_id", "education_components", ["id"])
    op.create_index("ix_education_components_page_id", "education_components", ["page_id"])
    op.create_index("ix_education_page_order", "education_components", ["page_id", "order"])

    op.create_table(
        "skill_categories",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=100), nullable=False, unique=True),
        sa.Column("order", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_skill_categories_id", "skill_categories", ["id"])

    op.create_table(
        "skills",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "skill_category_id",
            sa.Integer(),
            sa.ForeignKey("skill_categories.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("skill_category_id", "name", name="uq_skill_category_name"),
    )
    op.create_index("ix_skills_id", "skills", ["id"])
    op.create_index("ix_skills_skill_category_id", "skills", ["skill_category_id"])

    op.create_table(
        "builder_data",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("page_id", sa.Integer(), sa.ForeignKey("pages.id", ondelete="CASCADE"), nullable=False),
        sa.Column("elements", sa.JSON(), nullable=False),
        sa.Column("theme", sa.JSON(), nullable=False),
        sa.Column("version", sa.Integer(), server_default="1", nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_builder_data_id", "builder_data", ["id"])
    op.create_index("ix_builder_data_page_id", "builder_data", ["page_id"], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        "builder_data",
        "skills",
        "skill_categories",
        "education_components",
        "experience_components",
        "hero_components",
        "pages",
        "users",
    ):
        op.drop_table(table)
