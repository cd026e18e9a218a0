"""initial_schema

Create `users`, `offices` and `employees`.

users.office_id and offices.created_by reference each other, so the
offices → users foreign key is added after both tables exist.

Revision ID: 5c1e9a7d2b40
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5c1e9a7d2b40"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "offices",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=200), nullable=False),
        sa.Column("password_hash", sa.String(length=256), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("office_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["office_id"], ["offices.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    with op.batch_alter_table("offices") as batch_op:
        batch_op.create_foreign_key(
            "fk_offices_created_by", "users", ["created_by"], ["id"], ondelete="SET NULL",
        )

    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("office_id", sa.Integer(), nullable=False),
        sa.Column("is_registered_on_igot", sa.Boolean(), nullable=False),
        sa.Column("courses_enrolled", sa.Integer(), nullable=False),
        sa.Column("courses_completed", sa.Integer(), nullable=False),
        sa.Column("report_date", sa.DateTime(), nullable=False),
        sa.Column("is_frozen", sa.Boolean(), nullable=False),
        sa.Column("created_by", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["office_id"], ["offices.id"]),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_employees_office_id", "employees", ["office_id"])
    op.create_index("ix_employees_report_date", "employees", ["report_date"])


def downgrade():
    op.drop_index("ix_employees_report_date", table_name="employees")
    op.drop_index("ix_employees_office_id", table_name="employees")
    op.drop_table("employees")
    with op.batch_alter_table("offices") as batch_op:
        batch_op.drop_constraint("fk_offices_created_by", type_="foreignkey")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    op.drop_table("offices")
