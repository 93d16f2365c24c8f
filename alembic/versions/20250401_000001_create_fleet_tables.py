"""Create users, clients and fleet tables

Revision ID: 20250401_000001
Revises: None
Create Date: 2025-04-01

Operator accounts, clients, drivers, vehicle types, vehicles and jobs.
Billing reads these; their CRUD lives elsewhere.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20250401_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the operator, client and fleet tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('company_name', sa.String(200), nullable=True),
        sa.Column('contact_no', sa.String(50), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'clients',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('contact_no', sa.String(50), nullable=False),
        sa.Column('company', sa.String(200), nullable=True),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_clients_user_id', ondelete='CASCADE'),
    )
    op.create_index('ix_clients_user_id', 'clients', ['user_id'])

    op.create_table(
        'drivers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('contact_no', sa.String(50), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_drivers_user_id', ondelete='CASCADE'),
    )
    op.create_index('ix_drivers_user_id', 'drivers', ['user_id'])

    op.create_table(
        'vehicle_types',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('description', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_vehicle_types_user_id', ondelete='CASCADE'),
    )
    op.create_index('ix_vehicle_types_user_id', 'vehicle_types', ['user_id'])

    op.create_table(
        'vehicles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('vehicle_type_id', sa.Integer(), nullable=False),
        sa.Column('registration_no', sa.String(50), nullable=False),
        sa.Column('model', sa.String(100), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_vehicles_user_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['vehicle_type_id'], ['vehicle_types.id'], name='fk_vehicles_vehicle_type_id'),
    )
    op.create_index('ix_vehicles_user_id', 'vehicles', ['user_id'])


def downgrade() -> None:
    """Drop the operator, client and fleet tables."""
    op.drop_index('ix_vehicles_user_id', table_name='vehicles')
    op.drop_table('vehicles')
    op.drop_index('ix_vehicle_types_user_id', table_name='vehicle_types')
    op.drop_table('vehicle_types')
    op.drop_index('ix_drivers_user_id', table_name='drivers')
    op.drop_table('drivers')
    op.drop_index('ix_clients_user_id', table_name='clients')
    op.drop_table('clients')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
