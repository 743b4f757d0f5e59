"""create_user_authority_points

Revision ID: a1c2e3f4b5d6
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = 'a1c2e3f4b5d6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('authority',
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.PrimaryKeyConstraint('name'),
    )
    op.create_table('user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('login', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=254), nullable=True),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('last_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=True),
        sa.Column('activated', sa.Boolean(), nullable=False),
        sa.Column('hashed_password', sqlmodel.sql.sqltypes.AutoString(length=60), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index(op.f('ix_user_login'), 'user', ['login'], unique=True)
    op.create_table('user_authority',
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('authority_name', sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.ForeignKeyConstraint(['authority_name'], ['authority.name']),
        sa.PrimaryKeyConstraint('user_id', 'authority_name'),
    )
    op.create_table('points',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('exercise', sa.Integer(), nullable=True),
        sa.Column('meals', sa.Integer(), nullable=True),
        sa.Column('alcohol', sa.Integer(), nullable=True),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=140), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_points_date'), 'points', ['date'])
    op.create_index(op.f('ix_points_user_id'), 'points', ['user_id'])
    op.bulk_insert(
        sa.table('authority', sa.column('name', sa.String)),
        [{'name': 'ROLE_ADMIN'}, {'name': 'ROLE_USER'}],
    )


def downgrade() -> None:
    op.drop_index(op.f('ix_points_user_id'), table_name='points')
    op.drop_index(op.f('ix_points_date'), table_name='points')
    op.drop_table('points')
    op.drop_table('user_authority')
    op.drop_index(op.f('ix_user_login'), table_name='user')
    op.drop_table('user')
    op.drop_table('authority')
