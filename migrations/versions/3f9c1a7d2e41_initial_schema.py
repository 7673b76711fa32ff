"""Initial schema

Revision ID: 3f9c1a7d2e41
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f9c1a7d2e41"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_users_username"), ["username"], unique=True)

    op.create_table(
        "games",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("release_year", sa.Integer(), nullable=True),
        sa.Column("genre", sa.String(length=100), nullable=True),
        sa.Column("developer", sa.String(length=255), nullable=True),
        sa.Column("metascore", sa.Integer(), nullable=True),
        sa.Column("image_url", sa.String(length=500), nullable=True),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["owner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("games", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_games_title"), ["title"], unique=False)
        batch_op.create_index(batch_op.f("ix_games_genre"), ["genre"], unique=False)
        batch_op.create_index(batch_op.f("ix_games_developer"), ["developer"], unique=False)
        batch_op.create_index(batch_op.f("ix_games_metascore"), ["metascore"], unique=False)
        batch_op.create_index(batch_op.f("ix_games_owner_id"), ["owner_id"], unique=False)

    op.create_table(
        "game_platforms",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("game_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.ForeignKeyConstraint(["game_id"], ["games.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("game_platforms", schema=None) as batch_op:
        batch_op.create_index(batch_op.f("ix_game_platforms_game_id"), ["game_id"], unique=False)
        batch_op.create_index(batch_op.f("ix_game_platforms_name"), ["name"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table("game_platforms", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_game_platforms_name"))
        batch_op.drop_index(batch_op.f("ix_game_platforms_game_id"))
    op.drop_table("game_platforms")

    with op.batch_alter_table("games", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_games_owner_id"))
        batch_op.drop_index(batch_op.f("ix_games_metascore"))
        batch_op.drop_index(batch_op.f("ix_games_developer"))
        batch_op.drop_index(batch_op.f("ix_games_genre"))
        batch_op.drop_index(batch_op.f("ix_games_title"))
    op.drop_table("games")

    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.drop_index(batch_op.f("ix_users_username"))
    op.drop_table("users")
