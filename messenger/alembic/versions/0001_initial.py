"""initial

Revision ID: 0001
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = '0001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('members',
        sa.Column('id', sa.String(255), primary_key=True),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('display_name', sa.String(150), nullable=True),
        sa.Column('status_message', sa.String(255), nullable=True),
        sa.Column('role', sa.String(20), nullable=False, server_default='USER'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now())
    )
    op.create_index('ix_members_display_name', 'members', ['display_name'])
    op.create_table('personal_chats',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('sender_id', sa.String(255), sa.ForeignKey('members.id', ondelete='CASCADE'), nullable=False),
        sa.Column('receiver_id', sa.String(255), sa.ForeignKey('members.id', ondelete='CASCADE'), nullable=False),
        sa.Column('group_key', sa.String(530), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false())
    )
    op.create_index('ix_personal_chats_sender_id', 'personal_chats', ['sender_id'])
    op.create_index('ix_personal_chats_receiver_id', 'personal_chats', ['receiver_id'])
    op.create_index('ix_personal_chats_group_key', 'personal_chats', ['group_key'])
    op.create_index('ix_personal_chats_group_receiver', 'personal_chats', ['group_key', 'receiver_id'])

def downgrade():
    op.drop_table('personal_chats')
    op.drop_table('members')
