"""Create heroes and comments tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates the hero catalog and the per-hero comments table.
How:   Portable column types (UUID via sa.Uuid) so the same migration runs
       on PostgreSQL and SQLite.

Rollback: downgrade() drops both tables (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

POWERSTATS = ("intelligence", "strength", "speed", "durability", "power", "combat")


def upgrade() -> None:
    op.create_table(
        "heroes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),

        # Appearance
        sa.Column("gender", sa.String(50), nullable=True),
        sa.Column("race", sa.String(100), nullable=True),
        sa.Column("eye_color", sa.String(50), nullable=True),
        sa.Column("hair_color", sa.String(50), nullable=True),
        sa.Column("image_url", sa.String(512), nullable=True),

        # Powerstats, each 0..100
        *(
            sa.Column(stat, sa.Integer(), nullable=False, server_default=sa.text("0"))
            for stat in POWERSTATS
        ),
        *(
            sa.CheckConstraint(
                f"{stat} BETWEEN 0 AND 100", name=f"ck_heroes_{stat}_range"
            )
            for stat in POWERSTATS
        ),

        sa.PrimaryKeyConstraint("id"),
    )
    # Every hero listing sorts by name
    op.create_index("idx_heroes_name", "heroes", ["name"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("hero_id", sa.Uuid(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.ForeignKeyConstraint(["hero_id"], ["heroes.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    # "Newest comments of this hero" (ORDER BY created_at DESC, id DESC)
    op.create_index(
        "idx_comments_hero_created_at",
        "comments",
        ["hero_id", sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_comments_hero_created_at", table_name="comments")
    op.drop_table("comments")
    op.drop_index("idx_heroes_name", table_name="heroes")
    op.drop_table("heroes")
