"""create_ledger_schema

Revision ID: 3f9c2a7d41b8
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c2a7d41b8'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def tenant_fk() -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='CASCADE')


def upgrade() -> None:
    """
    Create the multi-tenant ledger schema.

    Creates:
    - users, tenants, tenant_memberships (one membership per user)
    - residents, meals, market, bills, each scoped by tenant_id

    Meal and market rows cascade with their resident; every ledger row
    cascades with its tenant.
    """
    # 1. Actors and groups
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('auth_user_id', sa.String(length=255), nullable=False),
        *timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_auth_user_id', 'users', ['auth_user_id'], unique=True)

    op.create_table(
        'tenants',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        *timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'tenant_memberships',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('role', sa.String(length=6), nullable=False),
        *timestamps(),
        tenant_fk(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index('ix_tenant_memberships_tenant_id', 'tenant_memberships', ['tenant_id'])

    # 2. Ledger collections
    op.create_table(
        'residents',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('tenant_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('join_date', sa.Date(), nullable=False),
        *timestamps(),
        tenant_fk(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_residents_tenant_id', 'residents', ['tenant_id'])

    op.create_table(
        'meals',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('tenant_id', sa.String(length=36), nullable=False),
        sa.Column('resident_id', sa.String(length=36), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('meal_count', sa.Integer(), nullable=False),
        *timestamps(),
        tenant_fk(),
        sa.ForeignKeyConstraint(['resident_id'], ['residents.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('resident_id', 'date', name='uq_meals_resident_date'),
    )
    op.create_index('ix_meals_tenant_id', 'meals', ['tenant_id'])
    op.create_index('ix_meals_tenant_date', 'meals', ['tenant_id', 'date'])

    op.create_table(
        'market',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('tenant_id', sa.String(length=36), nullable=False),
        sa.Column('resident_id', sa.String(length=36), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        *timestamps(),
        tenant_fk(),
        sa.ForeignKeyConstraint(['resident_id'], ['residents.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_market_tenant_id', 'market', ['tenant_id'])
    op.create_index('ix_market_resident_id', 'market', ['resident_id'])
    op.create_index('ix_market_tenant_date', 'market', ['tenant_id', 'date'])

    op.create_table(
        'bills',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('tenant_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        *timestamps(),
        tenant_fk(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_bills_tenant_id', 'bills', ['tenant_id'])
    op.create_index('ix_bills_tenant_date', 'bills', ['tenant_id', 'date'])


def downgrade() -> None:
    """Drop the ledger schema (children first)."""
    for table in ('bills', 'market', 'meals', 'residents', 'tenant_memberships', 'tenants', 'users'):
        op.drop_table(table)
