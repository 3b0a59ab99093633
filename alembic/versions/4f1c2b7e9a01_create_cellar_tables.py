"""create production lots, ttb ledger, report periods and winery registration

Revision ID: 4f1c2b7e9a01
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1c2b7e9a01'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'production_lots',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('varietal', sa.String(length=255), nullable=True),
        sa.Column('vintage', sa.Integer(), nullable=True),
        sa.Column('wine_type', sa.String(length=32), nullable=False),
        sa.Column('is_hard_cider', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('current_volume_gallons', sa.DECIMAL(12, 3), nullable=False, server_default='0'),
        sa.Column('current_alcohol_pct', sa.DECIMAL(5, 2), nullable=True),
        sa.Column('current_ph', sa.DECIMAL(4, 2), nullable=True),
        sa.Column('current_ta', sa.DECIMAL(6, 2), nullable=True),
        sa.Column('aging_start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('fermentation_end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('container_name', sa.String(length=255), nullable=True),
        sa.Column('ttb_tax_class', sa.String(length=32), nullable=True),
        sa.Column('tax_class_rules_version', sa.String(length=32), nullable=True),
        sa.Column('bond_status', sa.String(length=32), nullable=False, server_default='in_bond'),
        sa.Column('archived_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_production_lots')),
    )
    op.create_index(op.f('ix_production_lots_tenant_id'), 'production_lots', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_production_lots_status'), 'production_lots', ['status'], unique=False)

    op.create_table(
        'barrel_assignments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('lot_id', sa.Uuid(), nullable=False),
        sa.Column('barrel_name', sa.String(length=255), nullable=False),
        sa.Column('assigned_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ['lot_id'], ['production_lots.id'],
            name=op.f('fk_barrel_assignments_lot_id_production_lots'),
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_barrel_assignments')),
    )
    op.create_index(op.f('ix_barrel_assignments_lot_id'), 'barrel_assignments', ['lot_id'], unique=False)

    op.create_table(
        'ttb_transactions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('transaction_type', sa.String(length=48), nullable=False),
        sa.Column('tax_class', sa.String(length=32), nullable=False),
        sa.Column('volume_gallons', sa.DECIMAL(12, 3), nullable=False),
        sa.Column('transaction_date', sa.Date(), nullable=False),
        sa.Column('lot_id', sa.Uuid(), nullable=True),
        sa.Column('container_id', sa.Uuid(), nullable=True),
        sa.Column('bottling_run_id', sa.Uuid(), nullable=True),
        sa.Column('bond_status', sa.String(length=32), nullable=True),
        sa.Column('source_event_type', sa.String(length=64), nullable=True),
        sa.Column('source_event_id', sa.Uuid(), nullable=True),
        sa.Column('notes', sa.String(length=1024), nullable=True),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ['lot_id'], ['production_lots.id'],
            name=op.f('fk_ttb_transactions_lot_id_production_lots'),
            ondelete='SET NULL',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_ttb_transactions')),
        sa.UniqueConstraint(
            'tenant_id', 'source_event_type', 'source_event_id',
            name='uq_ttb_transactions_source_event',
        ),
    )
    op.create_index(op.f('ix_ttb_transactions_tenant_id'), 'ttb_transactions', ['tenant_id'], unique=False)
    op.create_index(op.f('ix_ttb_transactions_transaction_type'), 'ttb_transactions', ['transaction_type'], unique=False)
    op.create_index(op.f('ix_ttb_transactions_tax_class'), 'ttb_transactions', ['tax_class'], unique=False)
    op.create_index(op.f('ix_ttb_transactions_transaction_date'), 'ttb_transactions', ['transaction_date'], unique=False)
    op.create_index(op.f('ix_ttb_transactions_lot_id'), 'ttb_transactions', ['lot_id'], unique=False)

    op.create_table(
        'ttb_report_periods',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('period_start', sa.Date(), nullable=False),
        sa.Column('period_end', sa.Date(), nullable=False),
        sa.Column('period_type', sa.String(length=16), nullable=False, server_default='monthly'),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='draft'),
        sa.Column('report_data', sa.JSON(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('submitted_by', sa.Uuid(), nullable=True),
        sa.Column('confirmation_number', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_ttb_report_periods')),
        sa.UniqueConstraint('tenant_id', 'period_start', 'period_end', name='uq_ttb_report_periods_period'),
    )
    op.create_index(op.f('ix_ttb_report_periods_tenant_id'), 'ttb_report_periods', ['tenant_id'], unique=False)

    op.create_table(
        'winery_registrations',
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('operated_by', sa.String(length=255), nullable=False),
        sa.Column('trade_name', sa.String(length=255), nullable=True),
        sa.Column('ein', sa.String(length=16), nullable=False),
        sa.Column('registry_number', sa.String(length=32), nullable=False),
        sa.Column('premises_address', sa.String(length=255), nullable=False),
        sa.Column('premises_city', sa.String(length=128), nullable=False),
        sa.Column('premises_state', sa.String(length=2), nullable=False),
        sa.Column('premises_zip', sa.String(length=10), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('tenant_id', name=op.f('pk_winery_registrations')),
    )


def downgrade() -> None:
    op.drop_table('winery_registrations')
    op.drop_index(op.f('ix_ttb_report_periods_tenant_id'), table_name='ttb_report_periods')
    op.drop_table('ttb_report_periods')
    op.drop_index(op.f('ix_ttb_transactions_lot_id'), table_name='ttb_transactions')
    op.drop_index(op.f('ix_ttb_transactions_transaction_date'), table_name='ttb_transactions')
    op.drop_index(op.f('ix_ttb_transactions_tax_class'), table_name='ttb_transactions')
    op.drop_index(op.f('ix_ttb_transactions_transaction_type'), table_name='ttb_transactions')
    op.drop_index(op.f('ix_ttb_transactions_tenant_id'), table_name='ttb_transactions')
    op.drop_table('ttb_transactions')
    op.drop_index(op.f('ix_barrel_assignments_lot_id'), table_name='barrel_assignments')
    op.drop_table('barrel_assignments')
    op.drop_index(op.f('ix_production_lots_status'), table_name='production_lots')
    op.drop_index(op.f('ix_production_lots_tenant_id'), table_name='production_lots')
    op.drop_table('production_lots')
