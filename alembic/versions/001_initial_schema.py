"""initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # One bidding window per listing
    op.create_table(
        "bid_windows",
        sa.Column("list_id", sa.BigInteger(), primary_key=True, autoincrement=False),
        sa.Column("owner_id", sa.BigInteger(), nullable=False),
        sa.Column("opened_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ttl_seconds", sa.BigInteger(), nullable=False),
    )
    op.create_index("ix_bid_windows_owner_id", "bid_windows", ["owner_id"])

    # Bidder offers; one per (listing, bidder)
    op.create_table(
        "bid_offers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("list_id", sa.BigInteger(), nullable=False),
        sa.Column("bidder_id", sa.BigInteger(), nullable=False),
        sa.Column("price", sa.BigInteger(), nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "pending",
                "accepted",
                "rejected",
                name="offer_status",
                native_enum=False,
                length=32,
            ),
            nullable=False,
        ),
        sa.Column("chat_room_id", sa.String(256), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.UniqueConstraint("list_id", "bidder_id", name="uq_bid_offers_list_bidder"),
    )
    op.create_index("ix_bid_offers_list_price", "bid_offers", ["list_id", "price"])
    op.create_index("ix_bid_offers_bidder_id", "bid_offers", ["bidder_id"])
    op.create_index("ix_bid_offers_chat_room_id", "bid_offers", ["chat_room_id"])


def downgrade() -> None:
    op.drop_index("ix_bid_offers_chat_room_id", table_name="bid_offers")
    op.drop_index("ix_bid_offers_bidder_id", table_name="bid_offers")
    op.drop_index("ix_bid_offers_list_price", table_name="bid_offers")
    op.drop_table("bid_offers")
    op.drop_index("ix_bid_windows_owner_id", table_name="bid_windows")
    op.drop_table("bid_windows")
