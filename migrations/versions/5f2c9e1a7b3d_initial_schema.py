"""initial schema: users, product, image, health_checks

Revision ID: 5f2c9e1a7b3d
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5f2c9e1a7b3d'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('first_name', sa.String(), nullable=False),
        sa.Column('last_name', sa.String(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('account_created', sa.DateTime(timezone=True), nullable=True),
        sa.Column('account_updated', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'product',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.String(), nullable=False),
        sa.Column('sku', sa.String(), nullable=False),
        sa.Column('manufacturer', sa.String(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('owner_user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('date_added', sa.DateTime(timezone=True), nullable=True),
        sa.Column('date_last_updated', sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint('quantity >= 0 AND quantity <= 100', name='ck_product_quantity'),
    )
    op.create_index('ix_product_owner_user_id', 'product', ['owner_user_id'])

    op.create_table(
        'image',
        sa.Column('image_id', sa.Integer(), primary_key=True),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('product.id'), nullable=False),
        sa.Column('file_name', sa.String(), nullable=False),
        sa.Column('s3_bucket_path', sa.String(), nullable=False),
        sa.Column('date_created', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_image_product_id', 'image', ['product_id'])

    op.create_table(
        'health_checks',
        sa.Column('check_id', sa.Integer(), primary_key=True),
        sa.Column('check_datetime', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_health_checks_check_datetime', 'health_checks', ['check_datetime'])


def downgrade():
    op.drop_table('health_checks')
    op.drop_table('image')
    op.drop_table('product')
    op.drop_table('users')
