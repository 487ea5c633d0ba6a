"""create score_entry, profile and admin_log tables

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-18 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '1a2b3c4d5e6f'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'score_entry' not in existing_tables:
        op.create_table(
            'score_entry',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('actor_kind', sa.String(length=16), nullable=False),
            sa.Column('address', sa.String(length=64), nullable=True),
            sa.Column('display_name', sa.String(length=64), nullable=False),
            sa.Column('game', sa.String(length=64), nullable=False),
            sa.Column('score', sa.Integer(), nullable=False),
            sa.Column('client_timestamp', sa.BigInteger(), nullable=True),
            sa.Column('recorded_at', sa.BigInteger(), nullable=False),
            sa.UniqueConstraint('game', 'address', 'client_timestamp', name='uq_score_entry_wallet_submission'),
        )
        op.create_index('ix_score_entry_address', 'score_entry', ['address'])
        op.create_index('ix_score_entry_game', 'score_entry', ['game'])
        op.create_index('ix_score_entry_ranking', 'score_entry', ['game', 'score', 'recorded_at'])

    if 'profile' not in existing_tables:
        op.create_table(
            'profile',
            sa.Column('address', sa.String(length=64), primary_key=True),
            sa.Column('games_played', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('total_score', sa.BigInteger(), nullable=False, server_default='0'),
            sa.Column('best_score', sa.Integer(), nullable=False, server_default='0'),
            sa.Column('updated_at', sa.BigInteger(), nullable=True),
        )

    if 'admin_log' not in existing_tables:
        op.create_table(
            'admin_log',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('action', sa.String(length=32), nullable=False),
            sa.Column('game', sa.String(length=64), nullable=False),
            sa.Column('timestamp', sa.BigInteger(), nullable=False),
        )
        op.create_index('ix_admin_log_game', 'admin_log', ['game'])


def downgrade():
    op.drop_index('ix_admin_log_game', table_name='admin_log')
    op.drop_table('admin_log')
    op.drop_table('profile')
    op.drop_index('ix_score_entry_ranking', table_name='score_entry')
    op.drop_index('ix_score_entry_game', table_name='score_entry')
    op.drop_index('ix_score_entry_address', table_name='score_entry')
    op.drop_table('score_entry')
