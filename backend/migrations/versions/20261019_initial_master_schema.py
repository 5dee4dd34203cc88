"""Initial master-data schema

Revision ID: 20261019_initial
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_initial"
down_revision = None
branch_labels = None
depends_on = None


def _audit_columns(updated_nullable: bool):
    return [
        sa.Column("created_by", sa.String(16), nullable=False),
        sa.Column("updated_by", sa.String(16), nullable=updated_nullable),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=updated_nullable),
    ]


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(5), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
        sa.UniqueConstraint("email"),
        sqlite_autoincrement=True,
    )

    op.create_table(
        "tax_rates",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("tax_code", sa.String(2), nullable=False),
        sa.Column("tax_name", sa.String(64), nullable=False),
        sa.Column("rate", sa.Float(), nullable=False),
        sa.Column("calculation_type", sa.Integer(), nullable=False),
        *_audit_columns(updated_nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tax_code"),
        sqlite_autoincrement=True,
    )

    op.create_table(
        "locations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("location_code", sa.String(2), nullable=False),
        sa.Column("location_name", sa.String(128), nullable=False),
        *_audit_columns(updated_nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("location_code"),
        sqlite_autoincrement=True,
    )

    op.create_table(
        "dropdown_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("dropdown_id", sa.String(64), nullable=False),
        sa.Column("dropdown_value", sa.String(255), nullable=False),
        *_audit_columns(updated_nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("dropdown_id", "dropdown_value", name="uq_dropdown_items_id_value"),
        sqlite_autoincrement=True,
    )
    with op.batch_alter_table("dropdown_items", schema=None) as batch_op:
        batch_op.create_index("ix_dropdown_items_dropdown_id", ["dropdown_id"], unique=False)

    op.create_table(
        "staff",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("staff_code", sa.String(10), nullable=False),
        sa.Column("staff_name", sa.String(128), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("department", sa.String(128), nullable=True),
        sa.Column("position", sa.String(128), nullable=True),
        sa.Column("phone_number", sa.String(32), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        *_audit_columns(updated_nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("staff_code"),
        sqlite_autoincrement=True,
    )

    op.create_table(
        "customers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("customer_code", sa.String(16), nullable=False),
        sa.Column("customer_name", sa.String(255), nullable=False),
        sa.Column("department_name", sa.String(255), nullable=True),
        sa.Column("honorific", sa.String(16), nullable=False),
        sa.Column("postal_code", sa.String(8), nullable=True),
        sa.Column("address1", sa.String(255), nullable=True),
        sa.Column("address2", sa.String(255), nullable=True),
        sa.Column("phone_number", sa.String(32), nullable=True),
        sa.Column("fax_number", sa.String(32), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("invoice_number", sa.String(14), nullable=True),
        sa.Column("invoice_issuance", sa.String(16), nullable=False),
        sa.Column("invoice_method", sa.String(32), nullable=True),
        sa.Column("closing_day", sa.String(16), nullable=True),
        sa.Column("payment_day", sa.String(16), nullable=True),
        sa.Column("payment_site_day", sa.String(16), nullable=True),
        sa.Column("tax_processing", sa.String(32), nullable=False),
        sa.Column("tax_rounding", sa.String(16), nullable=False),
        sa.Column("staff_id", sa.Integer(), nullable=True),
        sa.Column("wo_special_code", sa.String(32), nullable=True),
        *_audit_columns(updated_nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("customer_code"),
        sqlite_autoincrement=True,
    )
    with op.batch_alter_table("customers", schema=None) as batch_op:
        batch_op.create_index("ix_customers_staff_id", ["staff_id"], unique=False)


def downgrade():
    with op.batch_alter_table("customers", schema=None) as batch_op:
        batch_op.drop_index("ix_customers_staff_id")
    op.drop_table("customers")
    op.drop_table("staff")
    with op.batch_alter_table("dropdown_items", schema=None) as batch_op:
        batch_op.drop_index("ix_dropdown_items_dropdown_id")
    op.drop_table("dropdown_items")
    op.drop_table("locations")
    op.drop_table("tax_rates")
    op.drop_table("users")
