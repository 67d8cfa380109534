"""Users, saved recipes and authored recipes

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18 00:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("username", sa.String(length=25), nullable=False),
        sa.Column("password", sa.Text(), nullable=False),
        sa.Column("first_name", sa.Text(), nullable=False),
        sa.Column("last_name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("is_admin", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.PrimaryKeyConstraint("username", name=op.f("pk_users")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
    )

    op.create_table(
        "saved_recipes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("recipe_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("category", sa.Text(), nullable=True),
        sa.Column("area", sa.Text(), nullable=True),
        sa.Column("username", sa.String(length=25), nullable=False),
        sa.ForeignKeyConstraint(
            ["username"], ["users.username"],
            name=op.f("fk_saved_recipes_username_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_saved_recipes")),
        sa.UniqueConstraint("username", "recipe_id", name="uq_saved_recipes_username_recipe_id"),
    )
    op.create_index(op.f("ix_saved_recipes_username"), "saved_recipes", ["username"])

    op.create_table(
        "authored_recipes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("ingredients", sa.Text(), nullable=False),
        sa.Column("instructions", sa.Text(), nullable=False),
        sa.Column("username", sa.String(length=25), nullable=False),
        sa.ForeignKeyConstraint(
            ["username"], ["users.username"],
            name=op.f("fk_authored_recipes_username_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_authored_recipes")),
    )
    op.create_index(op.f("ix_authored_recipes_username"), "authored_recipes", ["username"])


def downgrade() -> None:
    op.drop_index(op.f("ix_authored_recipes_username"), table_name="authored_recipes")
    op.drop_table("authored_recipes")
    op.drop_index(op.f("ix_saved_recipes_username"), table_name="saved_recipes")
    op.drop_table("saved_recipes")
    op.drop_table("users")
