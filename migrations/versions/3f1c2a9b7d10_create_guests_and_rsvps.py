"""create guests and rsvps

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2025-03-02 10:41:12.518304

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3f1c2a9b7d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'guests',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('invite_link', sa.String(length=1024), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('guests', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_guests_name'), ['name'], unique=False)
        batch_op.create_index(batch_op.f('ix_guests_created_at'), ['created_at'], unique=False)

    op.create_table(
        'rsvps',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('attendance', sa.Enum('attending', 'not_attending', name='attendanceenum'), nullable=False),
        sa.Column('guest_count', sa.Integer(), nullable=False),
        sa.Column('channel', sa.Enum('website', 'whatsapp', 'manual', name='channelenum'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('rsvps', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_rsvps_attendance'), ['attendance'], unique=False)
        batch_op.create_index(batch_op.f('ix_rsvps_created_at'), ['created_at'], unique=False)


def downgrade():
    with op.batch_alter_table('rsvps', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_rsvps_created_at'))
        batch_op.drop_index(batch_op.f('ix_rsvps_attendance'))
    op.drop_table('rsvps')

    with op.batch_alter_table('guests', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_guests_created_at'))
        batch_op.drop_index(batch_op.f('ix_guests_name'))
    op.drop_table('guests')
