"""Initial affiliate schema.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Workspace (tenant root)
    op.create_table(
        "workspace",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("stripe_connect_id", sa.String(100)),
        *_timestamps(),
    )
    op.create_index("ix_workspace_slug", "workspace", ["slug"], unique=True)

    op.create_table(
        "partner",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(255)),
        sa.Column("country", sa.String(2)),
        *_timestamps(),
    )
    op.create_index("ix_partner_email", "partner", ["email"])

    op.create_table(
        "program",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("workspace_id", sa.String(64), sa.ForeignKey("workspace.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_index("ix_program_workspace_id", "program", ["workspace_id"])

    op.create_table(
        "program_enrollment",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("program_id", sa.String(64), sa.ForeignKey("program.id", ondelete="CASCADE"), nullable=False),
        sa.Column("partner_id", sa.String(64), sa.ForeignKey("partner.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("program_id", "partner_id", name="uq_program_enrollment_program_partner"),
    )
    op.create_index("ix_program_enrollment_program_id", "program_enrollment", ["program_id"])
    op.create_index("ix_program_enrollment_partner_id", "program_enrollment", ["partner_id"])

    op.create_table(
        "program_resource",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("program_id", sa.String(64), sa.ForeignKey("program.id", ondelete="CASCADE"), nullable=False),
        sa.Column("resource_type", sa.String(10), nullable=False),
        sa.Column("name", sa.String(200)),
        sa.Column("url", sa.String(2000)),
        sa.Column("size", sa.Integer),
        sa.Column("color", sa.String(20)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_program_resource_program_id", "program_resource", ["program_id"])

    op.create_table(
        "link",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("project_id", sa.String(64), sa.ForeignKey("workspace.id", ondelete="CASCADE"), nullable=False),
        sa.Column("domain", sa.String(190), nullable=False),
        sa.Column("key", sa.String(190), nullable=False),
        sa.Column("short_link", sa.String(400), nullable=False, unique=True),
        sa.Column("url", sa.String(2000), nullable=False),
        sa.Column("program_id", sa.String(64), sa.ForeignKey("program.id", ondelete="SET NULL")),
        sa.Column("partner_id", sa.String(64), sa.ForeignKey("partner.id", ondelete="SET NULL")),
        sa.Column("clicks", sa.Integer, nullable=False, server_default="0"),
        sa.Column("leads", sa.Integer, nullable=False, server_default="0"),
        sa.Column("sales", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_link_project_id", "link", ["project_id"])
    op.create_index("ix_link_domain_key", "link", ["domain", "key"], unique=True)
    op.create_index("ix_link_program_id", "link", ["program_id"])
    op.create_index("ix_link_partner_id", "link", ["partner_id"])

    op.create_table(
        "customer",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("project_id", sa.String(64), sa.ForeignKey("workspace.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(200)),
        sa.Column("external_id", sa.String(255)),
        sa.Column("project_connect_id", sa.String(100)),
        sa.Column("click_id", sa.String(32)),
        sa.Column("link_id", sa.String(64), sa.ForeignKey("link.id", ondelete="SET NULL")),
        sa.Column("clicked_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("project_id", "external_id", name="uq_customer_project_external_id"),
    )
    op.create_index("ix_customer_project_id", "customer", ["project_id"])
    op.create_index("ix_customer_link_id", "customer", ["link_id"])

    op.create_table(
        "commission",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("event_id", sa.String(32), unique=True),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("program_id", sa.String(64), sa.ForeignKey("program.id", ondelete="CASCADE"), nullable=False),
        sa.Column("partner_id", sa.String(64), sa.ForeignKey("partner.id", ondelete="CASCADE"), nullable=False),
        sa.Column("link_id", sa.String(64), sa.ForeignKey("link.id", ondelete="SET NULL")),
        sa.Column("customer_id", sa.String(64), sa.ForeignKey("customer.id", ondelete="SET NULL")),
        sa.Column("amount", sa.Integer, nullable=False, server_default="0"),
        sa.Column("earnings", sa.Integer, nullable=False, server_default="0"),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="1"),
        sa.Column("currency", sa.String(3), nullable=False, server_default="usd"),
        sa.Column("status", sa.String(20), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_commission_program_id", "commission", ["program_id"])
    op.create_index("ix_commission_partner_id", "commission", ["partner_id"])


def downgrade() -> None:
    for table in (
        "commission",
        "customer",
        "link",
        "program_resource",
        "program_enrollment",
        "program",
        "partner",
        "workspace",
    ):
        op.drop_table(table)
