"""Initial cloud mirror tables, one per local collection.

Revision ID: 0001
Revises: (none)
Create Date: 2026-10-19

Run with:
    python -m als.cli migrate
"""

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

from alembic import op
import sqlalchemy as sa


def _place_columns() -> list:
    return [
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("legal_name", sa.String(255)),
        sa.Column("city", sa.String(120)),
        sa.Column("state", sa.String(2)),
        sa.Column("cnpj", sa.String(20)),
        sa.Column("address", sa.Text()),
        sa.Column("neighborhood", sa.String(120)),
        sa.Column("zip_code", sa.String(10)),
    ]


def upgrade() -> None:
    # ── Registries ───────────────────────────────────────────

    op.create_table(
        "drivers",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("photo", sa.Text()),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("cpf", sa.String(20), nullable=False, server_default=""),
        sa.Column("rg", sa.String(20)),
        sa.Column("cnh", sa.String(20)),
        sa.Column("cnh_pdf_url", sa.Text()),
        sa.Column("phone", sa.String(30)),
        sa.Column("email", sa.String(255)),
        sa.Column("plate_horse", sa.String(10)),
        sa.Column("year_horse", sa.String(10)),
        sa.Column("plate_trailer", sa.String(10)),
        sa.Column("year_trailer", sa.String(10)),
        sa.Column("driver_type", sa.String(20), server_default="Externo"),
        sa.Column("status", sa.String(20), server_default="Ativo"),
        sa.Column("status_last_change_date", sa.String(40)),
        sa.Column("beneficiary_name", sa.String(255)),
        sa.Column("beneficiary_phone", sa.String(30)),
        sa.Column("beneficiary_email", sa.String(255)),
        sa.Column("beneficiary_cnpj", sa.String(20)),
        sa.Column("payment_preference", sa.String(10), server_default="PIX"),
        sa.Column("whatsapp_group_name", sa.String(255)),
        sa.Column("whatsapp_group_link", sa.Text()),
        sa.Column("registration_date", sa.String(40)),
        sa.Column("operations", sa.JSON(), server_default="[]"),
        sa.Column("trips_count", sa.Integer(), server_default="0"),
        sa.Column("generated_password", sa.String(255)),
    )

    op.create_table(
        "customers",
        *_place_columns(),
        sa.Column("operations", sa.JSON(), server_default="[]"),
    )
    op.create_table("ports", *_place_columns())
    op.create_table("pre_stacking", *_place_columns())

    op.create_table(
        "categories",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("parent_id", sa.String(64)),
    )

    # ── People ───────────────────────────────────────────────

    op.create_table(
        "staff",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("username", sa.String(120), nullable=False),
        sa.Column("role", sa.String(20), server_default="staff"),
        sa.Column("position", sa.String(120)),
        sa.Column("registration_date", sa.String(40)),
        sa.Column("status", sa.String(20), server_default="Ativo"),
        sa.Column("status_since", sa.String(40)),
        sa.Column("photo", sa.Text()),
        sa.Column("last_login", sa.String(40)),
        sa.Column("email_corp", sa.String(255)),
        sa.Column("phone_corp", sa.String(30)),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("username", sa.String(120), nullable=False),
        sa.Column("password", sa.String(255)),
        sa.Column("display_name", sa.String(255)),
        sa.Column("role", sa.String(20), server_default="staff"),
        sa.Column("last_login", sa.String(40)),
        sa.Column("photo", sa.Text()),
        sa.Column("position", sa.String(120)),
        sa.Column("driver_id", sa.String(64)),
        sa.Column("staff_id", sa.String(64)),
        sa.Column("status", sa.String(20)),
        sa.Column("is_first_login", sa.Boolean()),
        sa.Column("last_seen", sa.String(40)),
        sa.Column("is_online_visible", sa.Boolean()),
    )
    op.create_index("ix_users_username", "users", ["username"])
    op.create_index("ix_users_driver_id", "users", ["driver_id"])
    op.create_index("ix_users_staff_id", "users", ["staff_id"])

    # ── Trips ────────────────────────────────────────────────

    op.create_table(
        "trips",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("os", sa.String(64), server_default=""),
        sa.Column("booking", sa.String(64)),
        sa.Column("ship", sa.String(120)),
        sa.Column("date_time", sa.String(40)),
        sa.Column("status_time", sa.String(40)),
        sa.Column("is_late", sa.Boolean(), server_default="false"),
        sa.Column("type", sa.String(20), server_default="EXPORTAÇÃO"),
        sa.Column("category", sa.String(120)),
        sa.Column("sub_category", sa.String(120)),
        sa.Column("container", sa.String(20)),
        sa.Column("tara", sa.String(20)),
        sa.Column("seal", sa.String(30)),
        sa.Column("cva", sa.String(64)),
        sa.Column("customer", sa.JSON()),
        sa.Column("destination", sa.JSON()),
        sa.Column("driver", sa.JSON()),
        sa.Column("status", sa.String(40), server_default="Pendente"),
        sa.Column("status_history", sa.JSON(), server_default="[]"),
        sa.Column("advance_payment", sa.JSON()),
        sa.Column("balance_payment", sa.JSON()),
        sa.Column("documents", sa.JSON(), server_default="[]"),
        sa.Column("oc_form_data", sa.JSON()),
    )
    op.create_index("ix_trips_os", "trips", ["os"])


def downgrade() -> None:
    op.drop_index("ix_trips_os", table_name="trips")
    op.drop_table("trips")
    op.drop_index("ix_users_staff_id", table_name="users")
    op.drop_index("ix_users_driver_id", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
    op.drop_table("staff")
    op.drop_table("categories")
    op.drop_table("pre_stacking")
    op.drop_table("ports")
    op.drop_table("customers")
    op.drop_table("drivers")
