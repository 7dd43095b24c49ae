# backend/alembic/versions/001_initial_schema.py
"""Initial schema - users, teacher profiles, bookings, payments, reviews, marketplace boards

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 00:00:00.000000

Bookings carry their own schedule and price; payments are append-only
outcomes of provider events; each booking has at most one review.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all core tables."""
    print("Creating core tables...")

    op.create_table(
        "users",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="STUDENT"),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("image", sa.String(500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("role IN ('STUDENT', 'TEACHER')", name="ck_users_role"),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "teacher_profiles",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("user_id", sa.String(26), nullable=False),
        sa.Column("bio", sa.Text(), nullable=False, server_default=""),
        sa.Column("specialties", sa.JSON(), nullable=False),
        sa.Column("hourly_rate", sa.Numeric(10, 2), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("rating", sa.Numeric(3, 2), nullable=False, server_default="0"),
        sa.Column("total_reviews", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("hourly_rate > 0", name="ck_teacher_profiles_rate_positive"),
        sa.CheckConstraint("total_reviews >= 0", name="ck_teacher_profiles_reviews_non_negative"),
        sa.CheckConstraint("rating >= 0 AND rating <= 5", name="ck_teacher_profiles_rating_range"),
    )
    op.create_index("ix_teacher_profiles_id", "teacher_profiles", ["id"])
    op.create_index("ix_teacher_profiles_user_id", "teacher_profiles", ["user_id"], unique=True)

    op.create_table(
        "bookings",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("student_id", sa.String(26), nullable=False),
        sa.Column("teacher_id", sa.String(26), nullable=False),
        sa.Column("scheduled_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("checkout_session_id", sa.String(255), nullable=True, comment="Stripe Checkout session id"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("confirmed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["student_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["teacher_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('PENDING', 'CONFIRMED', 'COMPLETED', 'CANCELLED')",
            name="ck_bookings_status",
        ),
        sa.CheckConstraint(
            "duration_minutes >= 30 AND duration_minutes <= 240",
            name="ck_bookings_duration_range",
        ),
        sa.CheckConstraint("price > 0", name="ck_bookings_price_positive"),
    )
    op.create_index("ix_bookings_id", "bookings", ["id"])
    op.create_index("ix_bookings_student_id", "bookings", ["student_id"])
    op.create_index("ix_bookings_status", "bookings", ["status"])
    op.create_index("ix_bookings_checkout_session_id", "bookings", ["checkout_session_id"])
    # Conflict window lookups
    op.create_index(
        "ix_bookings_teacher_status_start",
        "bookings",
        ["teacher_id", "status", "scheduled_start"],
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("booking_id", sa.String(26), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("stripe_payment_id", sa.String(255), nullable=True, comment="Stripe PaymentIntent id"),
        sa.Column("stripe_session_id", sa.String(255), nullable=True, comment="Stripe Checkout session id"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["booking_id"], ["bookings.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("status IN ('COMPLETED', 'FAILED')", name="ck_payments_status"),
        sa.CheckConstraint("amount >= 0", name="ck_payments_amount_non_negative"),
    )
    op.create_index("ix_payments_booking_id", "payments", ["booking_id"])

    op.create_table(
        "reviews",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("booking_id", sa.String(26), nullable=False),
        sa.Column("student_id", sa.String(26), nullable=False),
        sa.Column("teacher_id", sa.String(26), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["booking_id"], ["bookings.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["student_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["teacher_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("booking_id", name="uq_reviews_booking"),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )
    op.create_index("ix_reviews_student_id", "reviews", ["student_id"])
    op.create_index("idx_reviews_teacher", "reviews", ["teacher_id"])
    op.create_index("idx_reviews_created_at", "reviews", ["created_at"])

    op.create_table(
        "posted_times",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("teacher_id", sa.String(26), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(5), nullable=False),
        sa.Column("end_time", sa.String(5), nullable=False),
        sa.Column("modality", sa.String(20), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("contact_phone", sa.String(20), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["teacher_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("price > 0", name="ck_posted_times_price_positive"),
        sa.CheckConstraint("end_time > start_time", name="ck_posted_times_time_order"),
    )
    op.create_index("ix_posted_times_id", "posted_times", ["id"])
    op.create_index("ix_posted_times_teacher_id", "posted_times", ["teacher_id"])

    op.create_table(
        "class_requests",
        sa.Column("id", sa.String(26), nullable=False),
        sa.Column("student_id", sa.String(26), nullable=False),
        sa.Column("modality", sa.String(20), nullable=False),
        sa.Column("preferred_date", sa.Date(), nullable=True),
        sa.Column("preferred_time", sa.String(5), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("max_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("contact_phone", sa.String(20), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["student_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "duration_minutes >= 30 AND duration_minutes <= 240",
            name="ck_class_requests_duration_range",
        ),
        sa.CheckConstraint("max_price IS NULL OR max_price > 0", name="ck_class_requests_max_price_positive"),
    )
    op.create_index("ix_class_requests_id", "class_requests", ["id"])
    op.create_index("ix_class_requests_student_id", "class_requests", ["student_id"])

    print("Core tables created")


def downgrade() -> None:
    """Drop all core tables."""
    print("Dropping core tables...")

    op.drop_index("ix_class_requests_student_id", table_name="class_requests")
    op.drop_index("ix_class_requests_id", table_name="class_requests")
    op.drop_table("class_requests")

    op.drop_index("ix_posted_times_teacher_id", table_name="posted_times")
    op.drop_index("ix_posted_times_id", table_name="posted_times")
    op.drop_table("posted_times")

    op.drop_index("idx_reviews_created_at", table_name="reviews")
    op.drop_index("idx_reviews_teacher", table_name="reviews")
    op.drop_index("ix_reviews_student_id", table_name="reviews")
    op.drop_table("reviews")

    op.drop_index("ix_payments_booking_id", table_name="payments")
    op.drop_table("payments")

    op.drop_index("ix_bookings_teacher_status_start", table_name="bookings")
    op.drop_index("ix_bookings_checkout_session_id", table_name="bookings")
    op.drop_index("ix_bookings_status", table_name="bookings")
    op.drop_index("ix_bookings_student_id", table_name="bookings")
    op.drop_index("ix_bookings_id", table_name="bookings")
    op.drop_table("bookings")

    op.drop_index("ix_teacher_profiles_user_id", table_name="teacher_profiles")
    op.drop_index("ix_teacher_profiles_id", table_name="teacher_profiles")
    op.drop_table("teacher_profiles")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_id", table_name="users")
    op.drop_table("users")

    print("Core tables dropped")
