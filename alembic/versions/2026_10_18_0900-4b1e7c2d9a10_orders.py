"""orders

Revision ID: 4b1e7c2d9a10
Revises:
Create Date: 2026-10-18 09:00:00.000000+07:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '4b1e7c2d9a10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'orders',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('order_code', sa.String(length=64), nullable=True),
        sa.Column('amount', sa.BigInteger(), nullable=False),
        sa.Column('payment_method', sa.Enum('CASH', 'TRANSFER', name='payment_method'), nullable=False),
        sa.Column('timestamp_ms', sa.BigInteger(), nullable=False),
        sa.Column('shift', sa.Enum('DAY', 'NIGHT', name='shift'), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_orders_timestamp_ms'), 'orders', ['timestamp_ms'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_orders_timestamp_ms'), table_name='orders')
    op.drop_table('orders')
    sa.Enum(name='shift').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='payment_method').drop(op.get_bind(), checkfirst=True)
