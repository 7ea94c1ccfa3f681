"""
Create the rate catalog, quotes, CRM and outbox tables.

Revision ID: 20261001_01_create_pricing_and_crm_tables
Revises:
Create Date: 2026-10-01
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261001_01_create_pricing_and_crm_tables"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

FREQUENCIES = ("weekly", "biweekly", "monthly", "oneTime")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "rates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "category",
            sa.Enum("squareFootage", "surcharge", "discount", name="ratecategory"),
            nullable=False,
        ),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("min_sq_ft", sa.Integer(), nullable=True),
        sa.Column("max_sq_ft", sa.Integer(), nullable=True),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=True),
        sa.Column("surcharge_type", sa.Enum("fixed", "percentage", name="surchargetype"), nullable=True),
        sa.Column("surcharge_value", sa.Numeric(10, 2), nullable=True),
        sa.Column("frequency", sa.Enum(*FREQUENCIES, name="servicefrequency"), nullable=True),
        sa.Column("discount_type", sa.Enum("fixed", "percentage", name="discounttype"), nullable=True),
        sa.Column("discount_value", sa.Numeric(10, 2), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_rates_id", "rates", ["id"])
    op.create_index("ix_rates_category", "rates", ["category"])
    op.create_index("ix_rates_is_active", "rates", ["is_active"])

    op.create_table(
        "clients",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("address", sa.String(), nullable=True),
        sa.Column("status", sa.Enum("client", "prospect", name="clientstatus"), nullable=False),
        sa.Column("source", sa.String(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_clients_id", "clients", ["id"])
    op.create_index("ix_clients_email", "clients", ["email"])

    op.create_table(
        "proposals",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("client_id", sa.Integer(), sa.ForeignKey("clients.id"), nullable=True),
        sa.Column("title", sa.String(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("Draft", "Sent", "Approved", "Declined", name="proposalstatus"),
            nullable=False,
        ),
        sa.Column("line_items", sa.JSON(), nullable=False),
        sa.Column("total", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("date_sent", sa.DateTime(), nullable=True),
        sa.Column("job_id", sa.Integer(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_proposals_id", "proposals", ["id"])
    op.create_index("ix_proposals_client_id", "proposals", ["client_id"])

    op.create_table(
        "quotes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("customer_name", sa.String(), nullable=False),
        sa.Column("customer_email", sa.String(), nullable=False),
        sa.Column("customer_phone", sa.String(), nullable=True),
        sa.Column("square_footage", sa.Integer(), nullable=False),
        sa.Column("service_frequency", sa.Enum(*FREQUENCIES, name="quotefrequency"), nullable=True),
        sa.Column("add_ons", sa.JSON(), nullable=False),
        sa.Column("base_price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("surcharges", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("discounts", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column(
            "status",
            sa.Enum("pending", "accepted", "rejected", "expired", name="quotestatus"),
            nullable=False,
        ),
        sa.Column(
            "prospect_id",
            sa.Integer(),
            sa.ForeignKey("clients.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "proposal_id",
            sa.Integer(),
            sa.ForeignKey("proposals.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index("ix_quotes_id", "quotes", ["id"])
    op.create_index("ix_quotes_customer_email", "quotes", ["customer_email"])
    op.create_index("ix_quotes_status", "quotes", ["status"])

    op.create_table(
        "outbox_events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("topic", sa.String(length=255), nullable=False),
        sa.Column("payload_json", sa.JSON(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("pending", "delivered", "failed", name="outboxstatus"),
            nullable=False,
        ),
        sa.Column("attempt_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_error", sa.Text(), nullable=True),
        sa.Column("delivered_at", sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_outbox_events_id", "outbox_events", ["id"])
    op.create_index("ix_outbox_events_topic", "outbox_events", ["topic"])
    op.create_index("ix_outbox_events_status", "outbox_events", ["status"])


def downgrade() -> None:
    op.drop_table("outbox_events")
    op.drop_table("quotes")
    op.drop_table("proposals")
    op.drop_table("clients")
    op.drop_table("rates")
