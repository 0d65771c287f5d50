"""Gas station back-office schema

Revision ID: 20261018_gas_station_schema
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_gas_station_schema"
down_revision = None
branch_labels = None
depends_on = None


def _created_at():
    return sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False)


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("login_method", sa.String(64), nullable=False),
        sa.Column("role", sa.String(16), nullable=False),
        sa.Column("external_id", sa.String(255), nullable=True),
        _created_at(),
        sa.Column("last_signed_in", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("external_id", name="uq_users_external_id"),
    )
    with op.batch_alter_table("users", schema=None) as batch_op:
        batch_op.create_index("ix_users_email", ["email"], unique=True)

    op.create_table(
        "session_tokens",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("token_hash", sa.String(64), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False),
        _created_at(),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_revoked", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("session_tokens", schema=None) as batch_op:
        batch_op.create_index("ix_session_tokens_token_hash", ["token_hash"], unique=True)
        batch_op.create_index("ix_session_tokens_user_id", ["user_id"], unique=False)
        batch_op.create_index("ix_session_tokens_expires_at", ["expires_at"], unique=False)
        batch_op.create_index("ix_session_tokens_is_revoked", ["is_revoked"], unique=False)
        batch_op.create_index("ix_session_tokens_user_active", ["user_id", "is_revoked"], unique=False)

    op.create_table(
        "gas_stations",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("city", sa.Text(), nullable=False),
        sa.Column("state", sa.Text(), nullable=False),
        sa.Column("zip_code", sa.String(10), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "employees",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("first_name", sa.Text(), nullable=False),
        sa.Column("last_name", sa.Text(), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("phone_number", sa.String(20), nullable=True),
        sa.Column("role", sa.String(16), nullable=False),
        sa.Column("profile_picture_url", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_employees_email"),
    )

    op.create_table(
        "employee_stations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.String(36), nullable=False),
        sa.Column("station_id", sa.String(36), nullable=False),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"]),
        sa.ForeignKeyConstraint(["station_id"], ["gas_stations.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("employee_id", "station_id", name="uq_employee_stations"),
    )
    with op.batch_alter_table("employee_stations", schema=None) as batch_op:
        batch_op.create_index("ix_employee_stations_employee_id", ["employee_id"], unique=False)
        batch_op.create_index("ix_employee_stations_station", ["station_id"], unique=False)

    op.create_table(
        "employee_documents",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.String(36), nullable=False),
        sa.Column("document_type", sa.String(50), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("storage_key", sa.Text(), nullable=False),
        sa.Column("content_type", sa.String(255), nullable=True),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"]),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    with op.batch_alter_table("employee_documents", schema=None) as batch_op:
        batch_op.create_index("ix_employee_documents_employee_id", ["employee_id"], unique=False)

    op.create_table(
        "shifts",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("station_id", sa.String(36), nullable=False),
        sa.Column("employee_id", sa.String(36), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(16), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["station_id"], ["gas_stations.id"]),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("shifts", schema=None) as batch_op:
        batch_op.create_index("ix_shifts_station_id", ["station_id"], unique=False)
        batch_op.create_index("ix_shifts_employee_id", ["employee_id"], unique=False)
        batch_op.create_index("ix_shifts_station_start", ["station_id", "start_time"], unique=False)
        batch_op.create_index("ix_shifts_employee_status", ["employee_id", "status"], unique=False)

    op.create_table(
        "shift_reports",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("shift_id", sa.String(36), nullable=False),
        sa.Column("station_number", sa.Integer(), nullable=True),
        sa.Column("total_sales_cents", sa.Integer(), nullable=False),
        sa.Column("total_tax_cents", sa.Integer(), nullable=False),
        sa.Column("cash_amount_cents", sa.Integer(), nullable=False),
        sa.Column("credit_amount_cents", sa.Integer(), nullable=False),
        sa.Column("debit_amount_cents", sa.Integer(), nullable=False),
        sa.Column("mobile_amount_cents", sa.Integer(), nullable=False),
        sa.Column("over_short_cents", sa.Integer(), nullable=False),
        sa.Column("fuel_sales_cents", sa.Integer(), nullable=False),
        sa.Column("grocery_sales_cents", sa.Integer(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("reviewed_by_user_id", sa.String(64), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["shift_id"], ["shifts.id"]),
        sa.ForeignKeyConstraint(["reviewed_by_user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("shift_id", name="uq_shift_reports_shift"),
    )
    with op.batch_alter_table("shift_reports", schema=None) as batch_op:
        batch_op.create_index("ix_shift_reports_status", ["status"], unique=False)

    op.create_table(
        "transactions",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("station_id", sa.String(36), nullable=False),
        sa.Column("shift_report_id", sa.String(36), nullable=True),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("transaction_date", sa.DateTime(timezone=True), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["station_id"], ["gas_stations.id"]),
        sa.ForeignKeyConstraint(["shift_report_id"], ["shift_reports.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("transactions", schema=None) as batch_op:
        batch_op.create_index("ix_transactions_shift_report_id", ["shift_report_id"], unique=False)
        batch_op.create_index("ix_transactions_station_date", ["station_id", "transaction_date"], unique=False)

    op.create_table(
        "expenses",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("station_id", sa.String(36), nullable=False),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("expense_date", sa.DateTime(timezone=True), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["station_id"], ["gas_stations.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("expenses", schema=None) as batch_op:
        batch_op.create_index("ix_expenses_station_date", ["station_id", "expense_date"], unique=False)
        batch_op.create_index("ix_expenses_station_category", ["station_id", "category"], unique=False)

    op.create_table(
        "fuel_deliveries",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("station_id", sa.String(36), nullable=False),
        sa.Column("supplier", sa.Text(), nullable=True),
        sa.Column("bill_of_lading_number", sa.String(100), nullable=False),
        sa.Column("delivery_date", sa.DateTime(timezone=True), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["station_id"], ["gas_stations.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    with op.batch_alter_table("fuel_deliveries", schema=None) as batch_op:
        batch_op.create_index("ix_fuel_deliveries_station_date", ["station_id", "delivery_date"], unique=False)

    op.create_table(
        "fuel_delivery_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("delivery_id", sa.String(36), nullable=False),
        sa.Column("fuel_grade", sa.String(16), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("price_per_gallon_cents", sa.Integer(), nullable=False),
        sa.Column("cost_cents", sa.Integer(), nullable=False),
        sa.Column("total_cost_cents", sa.Integer(), nullable=False),
        sa.Column("yellow_mark", sa.String(64), nullable=True),
        sa.Column("red_mark", sa.String(64), nullable=True),
        sa.ForeignKeyConstraint(["delivery_id"], ["fuel_deliveries.id"]),
        sa.PrimaryKeyConstraint("id"),
        sqlite_autoincrement=True,
    )
    with op.batch_alter_table("fuel_delivery_items", schema=None) as batch_op:
        batch_op.create_index("ix_fuel_delivery_items_delivery_id", ["delivery_id"], unique=False)

    op.create_table(
        "fuel_inventory",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("station_id", sa.String(36), nullable=False),
        sa.Column("fuel_grade", sa.String(16), nullable=False),
        sa.Column("quantity", sa.Numeric(12, 3), nullable=False),
        sa.Column("last_updated", sa.DateTime(timezone=True), server_default=sa.text("(CURRENT_TIMESTAMP)"), nullable=False),
        sa.ForeignKeyConstraint(["station_id"], ["gas_stations.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("station_id", "fuel_grade", name="uq_fuel_inventory_station_grade"),
    )
    with op.batch_alter_table("fuel_inventory", schema=None) as batch_op:
        batch_op.create_index("ix_fuel_inventory_station_id", ["station_id"], unique=False)


def downgrade():
    for table in (
        "fuel_inventory",
        "fuel_delivery_items",
        "fuel_deliveries",
        "expenses",
        "transactions",
        "shift_reports",
        "shifts",
        "employee_documents",
        "employee_stations",
        "employees",
        "gas_stations",
        "session_tokens",
        "users",
    ):
        op.drop_table(table)
