"""create player and coin tables

Revision ID: 5c0a1e9d2b7f
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c0a1e9d2b7f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'player' not in existing_tables:
        op.create_table(
            'player',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=32), nullable=False),
            sa.Column('row', sa.Integer(), nullable=False),
            sa.Column('col', sa.Integer(), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False, server_default='0'),
            sa.PrimaryKeyConstraint('id'),
        )
        op.create_index('ix_player_name', 'player', ['name'], unique=True)

    if 'coin' not in existing_tables:
        op.create_table(
            'coin',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('row', sa.Integer(), nullable=False),
            sa.Column('col', sa.Integer(), nullable=False),
            sa.Column('value', sa.Integer(), nullable=False),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('row', 'col', name='uq_coin_cell'),
        )


def downgrade():
    op.drop_table('coin')
    op.drop_index('ix_player_name', table_name='player')
    op.drop_table('player')
