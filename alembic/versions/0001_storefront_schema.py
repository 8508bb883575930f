from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision = "0001_storefront_schema"
down_revision = None
branch_labels = None
depends_on = None


def _now():
    return sa.func.now()


def upgrade() -> None:
    # Banco de desenvolvimento: em produção as tabelas já existem, então só cria o que falta
    bind = op.get_bind()
    existing = set(inspect(bind).get_table_names())

    if "country" not in existing:
        op.create_table(
            "country",
            sa.Column("country_id", sa.Integer(), primary_key=True),
            sa.Column("country", sa.Text(), nullable=False),
            sa.Column("last_update", sa.DateTime(), server_default=_now(), nullable=False),
        )

    if "city" not in existing:
        op.create_table(
            "city",
            sa.Column("city_id", sa.Integer(), primary_key=True),
            sa.Column("city", sa.Text(), nullable=False),
            sa.Column("country_id", sa.Integer(), sa.ForeignKey("country.country_id"), nullable=False),
            sa.Column("last_update", sa.DateTime(), server_default=_now(), nullable=False),
        )
        op.create_index("ix_city_country_id", "city", ["country_id"], unique=False)

    if "address" not in existing:
        op.create_table(
            "address",
            sa.Column("address_id", sa.Integer(), primary_key=True),
            sa.Column("address", sa.Text(), nullable=False),
            sa.Column("address2", sa.Text(), nullable=True),
            sa.Column("district", sa.Text(), nullable=False),
            sa.Column("city_id", sa.Integer(), sa.ForeignKey("city.city_id"), nullable=False),
            sa.Column("postal_code", sa.Text(), nullable=True),
            sa.Column("phone", sa.Text(), nullable=False),
            sa.Column("last_update", sa.DateTime(), server_default=_now(), nullable=False),
        )
        op.create_index("ix_address_city_id", "address", ["city_id"], unique=False)

    if "customer" not in existing:
        op.create_table(
            "customer",
            sa.Column("customer_id", sa.Integer(), primary_key=True),
            sa.Column("store_id", sa.Integer(), nullable=False),
            sa.Column("address_id", sa.Integer(), sa.ForeignKey("address.address_id"), nullable=False),
            sa.Column("first_name", sa.Text(), nullable=False),
            sa.Column("last_name", sa.Text(), nullable=False),
            sa.Column("ssn", sa.Text(), nullable=True),
            sa.Column("email", sa.Text(), nullable=True),
            sa.Column("active", sa.Boolean(), server_default=sa.true(), nullable=False),
            sa.Column("create_date", sa.Date(), server_default=sa.func.current_date(), nullable=False),
            sa.Column("last_update", sa.DateTime(), server_default=_now(), nullable=True),
        )
        op.create_index("ix_customer_store_id", "customer", ["store_id"], unique=False)
        op.create_index("ix_customer_address_id", "customer", ["address_id"], unique=False)

    if "staff" not in existing:
        op.create_table(
            "staff",
            sa.Column("staff_id", sa.Integer(), primary_key=True),
            sa.Column("store_id", sa.Integer(), nullable=False),
            sa.Column("address_id", sa.Integer(), sa.ForeignKey("address.address_id"), nullable=False),
            sa.Column("first_name", sa.Text(), nullable=False),
            sa.Column("last_name", sa.Text(), nullable=False),
            sa.Column("email", sa.Text(), nullable=True),
            sa.Column("username", sa.Text(), nullable=False),
            sa.Column("password", sa.Text(), nullable=True),
            sa.Column("active", sa.Boolean(), server_default=sa.true(), nullable=False),
            sa.Column("last_update", sa.DateTime(), server_default=_now(), nullable=False),
        )
        op.create_index("ix_staff_address_id", "staff", ["address_id"], unique=False)

    if "payment" not in existing:
        op.create_table(
            "payment",
            sa.Column("payment_id", sa.Integer(), primary_key=True),
            sa.Column("amount", sa.Numeric(5, 2), nullable=False),
            sa.Column("customer_id", sa.Integer(), sa.ForeignKey("customer.customer_id"), nullable=False),
            sa.Column("staff_id", sa.Integer(), sa.ForeignKey("staff.staff_id"), nullable=False),
            sa.Column("rental_id", sa.Integer(), nullable=True),
            sa.Column("cc_number", sa.Text(), nullable=True),
            sa.Column("cc_expiration", sa.Text(), nullable=True),
            sa.Column("cc_cvv", sa.Text(), nullable=True),
            sa.Column("payment_date", sa.DateTime(), nullable=False),
        )
        op.create_index("ix_payment_customer_id", "payment", ["customer_id"], unique=False)
        op.create_index("ix_payment_staff_id", "payment", ["staff_id"], unique=False)


def downgrade() -> None:
    for table in ("payment", "staff", "customer", "address", "city", "country"):
        op.drop_table(table)
