"""create auth and recipe_catalogue schemas

Revision ID: 3e9b1c7d5a20
Revises:
Create Date: 2026-10-17 09:12:44.118203

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3e9b1c7d5a20"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

DEFAULT_CATEGORIES = [
    ("Meat", "Beef, pork and lamb dishes"),
    ("Chicken", "Chicken and poultry dishes"),
    ("Fish", "Fish and seafood dishes"),
    ("Snacks", "Small bites and sides"),
    ("Desserts", "Sweet dishes and baking"),
]


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.execute("CREATE SCHEMA IF NOT EXISTS auth")
    op.execute("CREATE SCHEMA IF NOT EXISTS recipe_catalogue")

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        schema="auth",
    )
    op.create_index(op.f("ix_auth_users_id"), "users", ["id"], schema="auth")
    op.create_index(op.f("ix_auth_users_email"), "users", ["email"], unique=True, schema="auth")

    categories = op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        schema="recipe_catalogue",
    )
    op.create_index(
        op.f("ix_recipe_catalogue_categories_id"), "categories", ["id"], schema="recipe_catalogue"
    )

    op.create_table(
        "ingredients",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=50), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("length(trim(name)) > 0", name="ingredients_name_not_empty"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        schema="recipe_catalogue",
    )
    op.create_index(
        op.f("ix_recipe_catalogue_ingredients_id"), "ingredients", ["id"], schema="recipe_catalogue"
    )
    op.create_index(
        op.f("ix_recipe_catalogue_ingredients_category"),
        "ingredients",
        ["category"],
        schema="recipe_catalogue",
    )

    op.create_table(
        "recipes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("owner_user_id", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(
            ["category_id"], ["recipe_catalogue.categories.id"], ondelete="SET NULL"
        ),
        sa.ForeignKeyConstraint(["owner_user_id"], ["auth.users.id"]),
        sa.PrimaryKeyConstraint("id"),
        schema="recipe_catalogue",
    )
    for column in ("id", "category_id", "owner_user_id"):
        op.create_index(
            op.f(f"ix_recipe_catalogue_recipes_{column}"),
            "recipes",
            [column],
            schema="recipe_catalogue",
        )

    op.create_table(
        "recipe_ingredients",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("recipe_id", sa.Integer(), nullable=False),
        sa.Column("ingredient_id", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Numeric(precision=8, scale=2), nullable=False),
        sa.Column("unit", sa.String(length=20), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("quantity > 0", name="recipe_ingredients_quantity_positive"),
        sa.CheckConstraint("length(trim(unit)) > 0", name="recipe_ingredients_unit_not_blank"),
        sa.ForeignKeyConstraint(
            ["recipe_id"], ["recipe_catalogue.recipes.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(
            ["ingredient_id"], ["recipe_catalogue.ingredients.id"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "recipe_id", "ingredient_id", name="recipe_ingredients_unique_per_recipe"
        ),
        schema="recipe_catalogue",
    )
    for column in ("id", "recipe_id", "ingredient_id"):
        op.create_index(
            op.f(f"ix_recipe_catalogue_recipe_ingredients_{column}"),
            "recipe_ingredients",
            [column],
            schema="recipe_catalogue",
        )

    op.bulk_insert(
        categories,
        [{"name": name, "description": description} for name, description in DEFAULT_CATEGORIES],
    )


def downgrade() -> None:
    op.drop_table("recipe_ingredients", schema="recipe_catalogue")
    op.drop_table("recipes", schema="recipe_catalogue")
    op.drop_table("ingredients", schema="recipe_catalogue")
    op.drop_table("categories", schema="recipe_catalogue")
    op.drop_table("users", schema="auth")
    op.execute("DROP SCHEMA IF EXISTS recipe_catalogue")
    op.execute("DROP SCHEMA IF EXISTS auth")
