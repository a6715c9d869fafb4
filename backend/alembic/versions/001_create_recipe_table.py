"""Create recipe table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `recipe` table.
How:   Portable column types (JSON, VARCHAR-backed enum) so the same revision
       runs on PostgreSQL and SQLite.

Rollback: downgrade() drops the table entirely (all recipes are lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "recipe",

        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),

        # Stored as VARCHAR(20); allowed values enforced by a CHECK constraint
        sa.Column(
            "category",
            sa.Enum(
                "Dinner", "Sweet", "Drink", "Snack",
                name="recipe_category",
                native_enum=False,
                length=20,
                create_constraint=True,
            ),
            nullable=False,
            comment="Dinner, Sweet, Drink or Snack",
        ),

        sa.Column("title", sa.String(200), nullable=False),

        sa.Column("description", sa.Text(), nullable=True),

        sa.Column(
            "ingredients",
            sa.JSON(),
            nullable=False,
            comment="Ordered list of ingredient lines",
        ),

        sa.Column(
            "add_date",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When this recipe was created or last edited (UTC)",
        ),

        sa.Column("picture_url", sa.String(2048), nullable=True),

        sa.PrimaryKeyConstraint("id"),
    )

    # List filter by category
    op.create_index("idx_recipe_category", "recipe", ["category"])


def downgrade() -> None:
    op.drop_index("idx_recipe_category", table_name="recipe")
    op.drop_table("recipe")
