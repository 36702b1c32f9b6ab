"""Create widget_claims table

Revision ID: 3f9a1c2b7d10
Revises: 
Create Date: 2026-01-12 10:02:41.518203

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3f9a1c2b7d10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Databases created by the old server already have the table
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    if 'widget_claims' in inspector.get_table_names():
        return

    op.create_table('widget_claims',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('widget_id', sa.String(100), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('kit_subscriber_id', sa.String(100), nullable=True),
        sa.Column('claim_token', sa.String(24), nullable=False),
        sa.Column('ip_hash', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('confirmed_at', sa.DateTime(), nullable=True),
        sa.Column('delivered_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_widget_claims_email', 'widget_claims', ['email'])
    op.create_index('ix_widget_claims_claim_token', 'widget_claims', ['claim_token'], unique=True)


def downgrade():
    op.drop_index('ix_widget_claims_claim_token', table_name='widget_claims')
    op.drop_index('ix_widget_claims_email', table_name='widget_claims')
    op.drop_table('widget_claims')
