"""add_referrals

Revision ID: 8d4b2c6e1f30
Revises: 3e1f0a7c9b21
Create Date: 2026-10-06 15:41:07.902116

Referral feature:
- users.referred_by / users.referred_opportunity_id attribution columns
- 'referred' added to the allowed match statuses
- indexes for the archive query and the match ownership check
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '8d4b2c6e1f30'
down_revision: Union[str, None] = '3e1f0a7c9b21'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Referral attribution on users
    op.add_column('users', sa.Column('referred_by', sa.Integer(), nullable=True))
    op.add_column('users', sa.Column('referred_opportunity_id', sa.Integer(), nullable=True))
    op.create_foreign_key(
        'fk_users_referred_by_users', 'users', 'users',
        ['referred_by'], ['id'], ondelete='SET NULL',
    )
    op.create_foreign_key(
        'fk_users_referred_opportunity_id_asks', 'users', 'asks',
        ['referred_opportunity_id'], ['id'], ondelete='SET NULL',
    )
    op.create_index(op.f('ix_users_referred_by'), 'users', ['referred_by'], unique=False)
    op.create_index(
        op.f('ix_users_referred_opportunity_id'), 'users', ['referred_opportunity_id'], unique=False
    )

    # Allow 'referred' as a match status
    op.drop_constraint('ck_matches_status', 'matches', type_='check')
    op.create_check_constraint(
        'ck_matches_status',
        'matches',
        "status IN ('pending', 'accepted', 'declined', 'referred', 'expired')",
    )

    # Archive and ownership lookups
    op.create_index(op.f('ix_matches_status'), 'matches', ['status'], unique=False)
    op.create_index(
        'ix_matches_matched_user_id_status', 'matches', ['matched_user_id', 'status'], unique=False
    )


def downgrade() -> None:
    op.drop_index('ix_matches_matched_user_id_status', table_name='matches')
    op.drop_index(op.f('ix_matches_status'), table_name='matches')

    # Referred matches have no representation in the old status set
    op.execute("UPDATE matches SET status = 'declined' WHERE status = 'referred'")
    op.drop_constraint('ck_matches_status', 'matches', type_='check')
    op.create_check_constraint(
        'ck_matches_status',
        'matches',
        "status IN ('pending', 'accepted', 'declined', 'expired')",
    )

    op.drop_index(op.f('ix_users_referred_opportunity_id'), table_name='users')
    op.drop_index(op.f('ix_users_referred_by'), table_name='users')
    op.drop_constraint('fk_users_referred_opportunity_id_asks', 'users', type_='foreignkey')
    op.drop_constraint('fk_users_referred_by_users', 'users', type_='foreignkey')
    op.drop_column('users', 'referred_opportunity_id')
    op.drop_column('users', 'referred_by')
