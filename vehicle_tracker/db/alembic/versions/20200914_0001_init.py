"""Инициализация схемы (users, vehicles, fuel_purchases)."""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20200914_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Создает основные таблицы и индексы."""
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(length=35), nullable=False, unique=True),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("email", sa.String(length=70), nullable=False, unique=True),
        sa.Column("name", sa.String(length=70), nullable=False),
        sa.Column("selected_vehicle_id", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("onboarding", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column("reset_token", sa.String(length=255), nullable=True),
        sa.Column("reset_token_expiration", sa.Integer(), nullable=True),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_on", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("modified_on", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "vehicles",
        sa.Column("vehicle_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=35), nullable=False),
        sa.Column("vehicle_year", sa.Integer(), nullable=True),
        sa.Column("type_id", sa.Integer(), nullable=True),
        sa.Column("make_id", sa.Integer(), nullable=True),
        sa.Column("model_id", sa.Integer(), nullable=True),
        sa.Column("sub_model_id", sa.Integer(), nullable=True),
        sa.Column("transmission_id", sa.Integer(), nullable=True),
        sa.Column("drive_type_id", sa.Integer(), nullable=True),
        sa.Column("body_type_id", sa.Integer(), nullable=True),
        sa.Column("bed_type_id", sa.Integer(), nullable=True),
        sa.Column("vin", sa.String(length=20), nullable=True),
        sa.Column("license_plate", sa.String(length=20), nullable=True),
        sa.Column("insurance_number", sa.String(length=50), nullable=True),
        sa.Column("oil_change_frequency", sa.Integer(), nullable=True),
        sa.Column("default_energy_type_id", sa.Integer(), nullable=True),
        sa.Column("default_fuel_grade_id", sa.Integer(), nullable=True),
        sa.Column("note", sa.String(length=255), nullable=True),
        sa.Column("created_on", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("modified_on", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("idx_vehicles_user_name", "vehicles", ["user_id", "name"])

    op.create_table(
        "fuel_purchases",
        sa.Column("fuel_purchase_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "vehicle_id", sa.Integer(), sa.ForeignKey("vehicles.vehicle_id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("fuel_type_id", sa.Integer(), nullable=False),
        sa.Column("fuel_grade", sa.String(length=25), nullable=True),
        sa.Column("odometer", sa.Numeric(8, 2), nullable=False),
        sa.Column("amount", sa.Numeric(8, 2), nullable=False),
        sa.Column("price", sa.Numeric(8, 2), nullable=False),
        sa.Column("fuel_brand", sa.String(length=50), nullable=True),
        sa.Column("fuel_station", sa.String(length=50), nullable=True),
        sa.Column("partial_tank", sa.Boolean(), nullable=True),
        sa.Column("missed_prev_fill_up", sa.Boolean(), nullable=True),
        sa.Column("note", sa.String(length=255), nullable=True),
        sa.Column("date_of_fill_up", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_on", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("modified_on", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("idx_fuel_purchases_user_created", "fuel_purchases", ["user_id", "created_on"])
    op.create_index("idx_fuel_purchases_vehicle", "fuel_purchases", ["vehicle_id"])


def downgrade() -> None:
    """Откатывает изменения."""
    op.drop_index("idx_fuel_purchases_vehicle", table_name="fuel_purchases")
    op.drop_index("idx_fuel_purchases_user_created", table_name="fuel_purchases")
    op.drop_table("fuel_purchases")

    op.drop_index("idx_vehicles_user_name", table_name="vehicles")
    op.drop_table("vehicles")

    op.drop_table("users")
