"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _id() -> sa.Column:
    return sa.Column("id", sa.String(), primary_key=True, nullable=False)


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(), nullable=False)


def upgrade() -> None:
    # directory
    op.create_table(
        "profiles",
        _id(),
        sa.Column("full_name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=False, unique=True),
        sa.Column("role", sa.String(), nullable=False),  # admin | faculty | evaluator | student
        sa.Column("department_id", sa.String(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_profiles_role", "profiles", ["role"])

    op.create_table(
        "courses",
        _id(),
        sa.Column("code", sa.String(), nullable=False, unique=True),
        sa.Column("title", sa.String(), nullable=False),
        _created_at(),
    )

    op.create_table(
        "sections",
        _id(),
        sa.Column("course_id", sa.String(), sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("faculty_id", sa.String(), sa.ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True),
        sa.Column("term", sa.String(), nullable=True),
        sa.Column("academic_year", sa.String(), nullable=True),
        sa.Column("schedule", sa.String(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_sections_course_id", "sections", ["course_id"])
    op.create_index("ix_sections_faculty_id", "sections", ["faculty_id"])

    # periods
    op.create_table(
        "evaluation_periods",
        _id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),  # draft | open | closed
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("rubric_version", sa.String(), nullable=False, server_default="v1"),
        _created_at(),
        sa.CheckConstraint("status IN ('draft','open','closed')", name="ck_periods_status"),
    )
    op.create_index("ix_evaluation_periods_status", "evaluation_periods", ["status"])

    # rubric
    op.create_table(
        "rubric_categories",
        _id(),
        sa.Column("label", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        _created_at(),
    )
    op.create_index("ix_rubric_categories_order_index", "rubric_categories", ["order_index"])

    op.create_table(
        "rubric_items",
        _id(),
        sa.Column("category_id", sa.String(), sa.ForeignKey("rubric_categories.id", ondelete="CASCADE"), nullable=False),
        sa.Column("prompt", sa.String(), nullable=False),
        sa.Column("max_score", sa.Integer(), nullable=False, server_default="5"),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        _created_at(),
        sa.CheckConstraint("max_score > 0", name="ck_rubric_items_max_score"),
    )
    op.create_index("ix_rubric_items_category_id", "rubric_items", ["category_id"])

    # assignments / evaluations
    op.create_table(
        "evaluator_assignments",
        _id(),
        sa.Column("period_id", sa.String(), sa.ForeignKey("evaluation_periods.id", ondelete="CASCADE"), nullable=False),
        sa.Column("faculty_id", sa.String(), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("evaluator_id", sa.String(), sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role", sa.String(), nullable=False),  # self | peer | supervisor | student
        sa.Column("section_id", sa.String(), sa.ForeignKey("sections.id", ondelete="SET NULL"), nullable=True),
        _created_at(),
        sa.CheckConstraint("role IN ('self','peer','supervisor','student')", name="ck_assignments_role"),
    )
    op.create_index("ix_evaluator_assignments_period_id", "evaluator_assignments", ["period_id"])
    op.create_index("ix_evaluator_assignments_faculty_id", "evaluator_assignments", ["faculty_id"])
    op.create_index("ix_evaluator_assignments_evaluator_id", "evaluator_assignments", ["evaluator_id"])
    op.create_index("ix_evaluator_assignments_section_id", "evaluator_assignments", ["section_id"])

    op.create_table(
        "evaluations",
        _id(),
        sa.Column("assignment_id", sa.String(), sa.ForeignKey("evaluator_assignments.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(), nullable=False),  # draft | submitted
        sa.Column("submitted_at", sa.DateTime(), nullable=True),
        sa.Column("overall_comment", sa.String(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_evaluations_assignment_id", "evaluations", ["assignment_id"], unique=True)

    op.create_table(
        "evaluation_responses",
        _id(),
        sa.Column("evaluation_id", sa.String(), sa.ForeignKey("evaluations.id", ondelete="CASCADE"), nullable=False),
        sa.Column("rubric_item_id", sa.String(), sa.ForeignKey("rubric_items.id", ondelete="CASCADE"), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("comment", sa.String(), nullable=True),
        sa.UniqueConstraint("evaluation_id", "rubric_item_id", name="uq_responses_evaluation_item"),
        sa.CheckConstraint("score >= 1", name="ck_responses_score"),
    )
    op.create_index("ix_evaluation_responses_evaluation_id", "evaluation_responses", ["evaluation_id"])
    op.create_index("ix_evaluation_responses_rubric_item_id", "evaluation_responses", ["rubric_item_id"])

    # student feedback
    op.create_table(
        "student_sentiments",
        _id(),
        sa.Column("student_id", sa.String(), sa.ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True),
        sa.Column("period_id", sa.String(), sa.ForeignKey("evaluation_periods.id", ondelete="SET NULL"), nullable=True),
        sa.Column("section_id", sa.String(), sa.ForeignKey("sections.id", ondelete="SET NULL"), nullable=True),
        sa.Column("faculty_id", sa.String(), sa.ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True),
        sa.Column("sentiment", sa.String(), nullable=False),
        sa.Column("comments", sa.Text(), nullable=False),
        _created_at(),
        sa.CheckConstraint("sentiment IN ('positive','neutral','negative')", name="ck_sentiments_sentiment"),
    )
    op.create_index("ix_student_sentiments_created_at", "student_sentiments", ["created_at"])


def downgrade() -> None:
    for table in (
        "student_sentiments",
        "evaluation_responses",
        "evaluations",
        "evaluator_assignments",
        "rubric_items",
        "rubric_categories",
        "evaluation_periods",
        "sections",
        "courses",
        "profiles",
    ):
        op.drop_table(table)
