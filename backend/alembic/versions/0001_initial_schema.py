"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates all tables for the Talent Portal:
cohorts, users, leave_requests, it_tickets, profile_updates, announcements,
scorecards, verified_certificates, feedback, candidate_metrics.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

request_kind = sa.Enum("leave", "it_ticket", "profile_update", name="requestkind")
approval_status = sa.Enum("pending", "approved", "rejected", name="approvalstatus")
ticket_status = sa.Enum("open", "in_progress", "resolved", name="ticketstatus")


def upgrade() -> None:
    # --- cohorts ---
    op.create_table(
        "cohorts",
        sa.Column("cohort_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("program", sa.String(150), nullable=False),
        sa.Column("sponsor", sa.String(150), nullable=True),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("size", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- users ---
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("display_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False, server_default=""),
        sa.Column("role", sa.Enum("candidate", "tech_champion", "manager", "admin", name="role"), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("department", sa.String(100), nullable=False, server_default="General"),
        sa.Column("status", sa.Enum("active", "inactive", name="userstatus"), nullable=False),
        sa.Column("cohort_id", sa.String(36), sa.ForeignKey("cohorts.cohort_id"), nullable=True),
        sa.Column("location", sa.String(100), nullable=True),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("avatar", sa.String(500), nullable=False, server_default=""),
        sa.Column("last_active", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- leave_requests ---
    op.create_table(
        "leave_requests",
        sa.Column("request_id", sa.String(36), primary_key=True),
        sa.Column("kind", request_kind, nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False, index=True),
        sa.Column("user_name", sa.String(100), nullable=False),
        sa.Column("leave_type", sa.String(100), nullable=False),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=False),
        sa.Column("dates", sa.String(50), nullable=False),
        sa.Column("reason", sa.Text, nullable=False),
        sa.Column("status", approval_status, nullable=False, index=True),
        sa.Column("submitted_date", sa.Date, nullable=False),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- it_tickets ---
    op.create_table(
        "it_tickets",
        sa.Column("request_id", sa.String(36), primary_key=True),
        sa.Column("kind", request_kind, nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False, index=True),
        sa.Column("user_name", sa.String(100), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("priority", sa.Enum("low", "medium", "high", "critical", name="ticketpriority"), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("status", ticket_status, nullable=False, index=True),
        sa.Column("submitted_date", sa.Date, nullable=False),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- profile_updates ---
    op.create_table(
        "profile_updates",
        sa.Column("request_id", sa.String(36), primary_key=True),
        sa.Column("kind", request_kind, nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False, index=True),
        sa.Column("user_name", sa.String(100), nullable=False),
        sa.Column("updates", sa.JSON, nullable=False),
        sa.Column("status", approval_status, nullable=False, index=True),
        sa.Column("submitted_date", sa.Date, nullable=False),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- announcements ---
    op.create_table(
        "announcements",
        sa.Column("announcement_id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("type", sa.Enum("general", "urgent", "event", name="announcementtype"), nullable=False),
        sa.Column("target_cohort_id", sa.String(36), nullable=False, server_default="All"),
        sa.Column("target_cohort_name", sa.String(150), nullable=True),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- scorecards ---
    op.create_table(
        "scorecards",
        sa.Column("scorecard_id", sa.String(36), primary_key=True),
        sa.Column("candidate_id", sa.String(36), nullable=False, index=True),
        sa.Column("candidate_name", sa.String(100), nullable=False),
        sa.Column("reviewer_name", sa.String(100), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("week", sa.Integer, nullable=False),
        sa.Column("attendance", sa.Integer, nullable=False),
        sa.Column("communication", sa.Integer, nullable=False),
        sa.Column("accountability", sa.Integer, nullable=False),
        sa.Column("creativity_ownership", sa.Integer, nullable=False),
        sa.Column("object_delivery", sa.Integer, nullable=False),
        sa.Column("tech_skills", sa.Integer, nullable=False),
        sa.Column("comments", sa.Text, nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- verified_certificates ---
    op.create_table(
        "verified_certificates",
        sa.Column("certificate_id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=False, index=True),
        sa.Column("candidate_name", sa.String(255), nullable=True),
        sa.Column("course_name", sa.String(255), nullable=True),
        sa.Column("issue_date", sa.String(50), nullable=True),
        sa.Column("issuer", sa.String(255), nullable=True),
        sa.Column("verification_status", sa.String(20), nullable=False),
        sa.Column("confidence_score", sa.Float, nullable=False, server_default="0"),
        sa.Column("reason", sa.Text, nullable=True),
        sa.Column("verified_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- feedback ---
    op.create_table(
        "feedback",
        sa.Column("feedback_id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=False, index=True),
        sa.Column("user_name", sa.String(100), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("category", sa.Enum("course", "test", "project", "general", name="feedbackcategory"), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("sentiment", sa.String(20), nullable=False),
        sa.Column("topics", sa.JSON, nullable=False),
        sa.Column("ai_summary", sa.Text, nullable=False),
        sa.Column("urgency", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- candidate_metrics ---
    op.create_table(
        "candidate_metrics",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("cohort_name", sa.String(150), nullable=True),
        sa.Column("sponsor", sa.String(150), nullable=True),
        sa.Column("technical_score", sa.Integer, nullable=False, server_default="0"),
        sa.Column("soft_skill_score", sa.Integer, nullable=False, server_default="0"),
        sa.Column("attendance", sa.Integer, nullable=False, server_default="0"),
        sa.Column("projects_completed", sa.Integer, nullable=False, server_default="0"),
    )


def downgrade() -> None:
    op.drop_table("candidate_metrics")
    op.drop_table("feedback")
    op.drop_table("verified_certificates")
    op.drop_table("scorecards")
    op.drop_table("announcements")
    op.drop_table("profile_updates")
    op.drop_table("it_tickets")
    op.drop_table("leave_requests")
    op.drop_table("users")
    op.drop_table("cohorts")
