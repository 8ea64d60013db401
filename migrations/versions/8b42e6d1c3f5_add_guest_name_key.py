"""add guests.name_key

Revision ID: 8b42e6d1c3f5
Revises: 3f1c2a9b7d10
Create Date: 2025-03-09 16:05:47.203911

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '8b42e6d1c3f5'
down_revision = '3f1c2a9b7d10'
branch_labels = None
depends_on = None


def upgrade():
    with op.batch_alter_table('guests', schema=None) as batch_op:
        batch_op.add_column(sa.Column('name_key', sa.String(length=255), nullable=True))

    # 回填已有数据
    guests = sa.table('guests', sa.column('id', sa.String), sa.column('name', sa.String),
                      sa.column('name_key', sa.String))
    bind = op.get_bind()
    for guest_id, name in bind.execute(sa.select(guests.c.id, guests.c.name)).all():
        bind.execute(guests.update().where(guests.c.id == guest_id).values(name_key=name.casefold()))

    with op.batch_alter_table('guests', schema=None) as batch_op:
        batch_op.alter_column('name_key', existing_type=sa.String(length=255), nullable=False)
        batch_op.create_index(batch_op.f('ix_guests_name_key'), ['name_key'], unique=False)


def downgrade():
    with op.batch_alter_table('guests', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_guests_name_key'))
        batch_op.drop_column('name_key')
