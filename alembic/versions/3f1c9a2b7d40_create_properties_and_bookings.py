"""Create properties and bookings with active-range exclusion constraint

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2025-10-24 10:12:31.418202

"""

import sqlalchemy as sa

from alembic import op  # type: ignore[attr-defined]

# revision identifiers, used by Alembic.
revision = "3f1c9a2b7d40"
down_revision = None
branch_labels = None
depends_on = None

SCHEMA = "rentals"


def upgrade() -> None:
    """Upgrade schema."""
    # Needed for "property_id WITH =" inside a gist exclusion constraint
    op.execute("CREATE EXTENSION IF NOT EXISTS btree_gist")

    op.create_table(
        "properties",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("owner_id", sa.Integer(), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("max_guests", sa.Integer(), nullable=False, server_default="2"),
        sa.Column("available_from", sa.Date(), nullable=True),
        sa.Column("available_to", sa.Date(), nullable=True),
        sa.Column("minimum_stay_nights", sa.Integer(), nullable=True, server_default="1"),
        sa.Column("maximum_stay_nights", sa.Integer(), nullable=True),
        sa.Column(
            "rental_type",
            sa.Enum("short_term", "long_term", "both", name="rental_type", schema=SCHEMA),
            nullable=False,
            server_default="both",
        ),
        sa.Column("price_per_night", sa.Numeric(10, 2), nullable=True),
        sa.Column("cleaning_fee", sa.Numeric(10, 2), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.CheckConstraint("max_guests >= 1", name="ck_properties_max_guests_positive"),
        sa.CheckConstraint("price_per_night >= 0", name="ck_properties_price_non_negative"),
        sa.CheckConstraint("cleaning_fee >= 0", name="ck_properties_cleaning_fee_non_negative"),
        schema=SCHEMA,
    )
    op.create_index("ix_properties_owner_id", "properties", ["owner_id"], schema=SCHEMA)

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "property_id",
            sa.Integer(),
            sa.ForeignKey(f"{SCHEMA}.properties.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("guest_id", sa.Integer(), nullable=False),
        sa.Column("check_in", sa.Date(), nullable=False),
        sa.Column("check_out", sa.Date(), nullable=False),
        sa.Column("guests_count", sa.Integer(), nullable=False),
        sa.Column("nights", sa.Integer(), nullable=False),
        sa.Column("price_per_night", sa.Numeric(10, 2), nullable=False),
        sa.Column("subtotal", sa.Numeric(10, 2), nullable=False),
        sa.Column("cleaning_fee", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("service_fee", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "pending",
                "confirmed",
                "cancelled",
                "completed",
                "rejected",
                name="booking_status",
                schema=SCHEMA,
            ),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "payment_status",
            sa.Enum("pending", "paid", "refunded", "failed", name="payment_status", schema=SCHEMA),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("special_requests", sa.Text(), nullable=True),
        sa.Column("cancellation_reason", sa.Text(), nullable=True),
        sa.Column("confirmed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.CheckConstraint("check_out > check_in", name="ck_bookings_check_out_after_check_in"),
        sa.CheckConstraint("guests_count >= 1", name="ck_bookings_guests_count_positive"),
        schema=SCHEMA,
    )
    op.create_index("ix_bookings_guest_id", "bookings", ["guest_id"], schema=SCHEMA)
    op.create_index("ix_bookings_status", "bookings", ["status"], schema=SCHEMA)
    op.create_index(
        "ix_bookings_property_dates",
        "bookings",
        ["property_id", "check_in", "check_out"],
        schema=SCHEMA,
    )

    op.execute(
        f"""
        ALTER TABLE {SCHEMA}.bookings
        ADD CONSTRAINT ex_bookings_active_no_overlap
        EXCLUDE USING gist (property_id WITH =, daterange(check_in, check_out) WITH &&)
        WHERE (status IN ('pending', 'confirmed', 'completed'))
        """
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("bookings", schema=SCHEMA)
    op.drop_table("properties", schema=SCHEMA)

    bind = op.get_bind()
    for enum_name in ("payment_status", "booking_status", "rental_type"):
        sa.Enum(name=enum_name, schema=SCHEMA).drop(bind, checkfirst=True)
