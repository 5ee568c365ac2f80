"""initial schema: pickup points, receptions, products, users

Revision ID: 4b1d0e7c9a21
Revises:
Create Date: 2025-04-12 00:00:00.000000
"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '4b1d0e7c9a21'
down_revision = None
branch_labels = None
depends_on = None

OPEN_PREDICATE = sa.text("status = 'in_progress'")

pvz_city = sa.Enum('Москва', 'Санкт-Петербург', 'Казань', name='pvz_city')
reception_status = sa.Enum('in_progress', 'close', name='reception_status')
product_type = sa.Enum('электроника', 'одежда', 'обувь', name='product_type')
user_role = sa.Enum('employee', 'moderator', name='user_role')


def upgrade():
    op.create_table(
        'pickup_points',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('registration_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('city', pvz_city, nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_pickup_points')),
    )
    op.create_index(
        'ix_pickup_points_registration_date', 'pickup_points', ['registration_date']
    )

    op.create_table(
        'receptions',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('date_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('pvz_id', sa.Uuid(), nullable=False),
        sa.Column('status', reception_status, nullable=False),
        sa.ForeignKeyConstraint(
            ['pvz_id'],
            ['pickup_points.id'],
            name=op.f('fk_receptions_pvz_id_pickup_points'),
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_receptions')),
    )
    op.create_index('ix_receptions_pvz_id_date_time', 'receptions', ['pvz_id', 'date_time'])
    op.create_index(
        'uq_receptions_open_per_pvz',
        'receptions',
        ['pvz_id'],
        unique=True,
        postgresql_where=OPEN_PREDICATE,
        sqlite_where=OPEN_PREDICATE,
    )

    op.create_table(
        'products',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('date_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('type', product_type, nullable=False),
        sa.Column('reception_id', sa.Uuid(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(
            ['reception_id'],
            ['receptions.id'],
            name=op.f('fk_products_reception_id_receptions'),
            ondelete='CASCADE',
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_products')),
        sa.UniqueConstraint(
            'reception_id', 'position', name=op.f('uq_products_reception_position')
        ),
    )
    op.create_index(
        'ix_products_reception_id_date_time', 'products', ['reception_id', 'date_time']
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('password_hash', sa.String(length=254), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
        sa.UniqueConstraint('email', name=op.f('uq_users_email')),
    )


def downgrade():
    op.drop_table('users')
    op.drop_index('ix_products_reception_id_date_time', table_name='products')
    op.drop_table('products')
    op.drop_index('uq_receptions_open_per_pvz', table_name='receptions')
    op.drop_index('ix_receptions_pvz_id_date_time', table_name='receptions')
    op.drop_table('receptions')
    op.drop_index('ix_pickup_points_registration_date', table_name='pickup_points')
    op.drop_table('pickup_points')
    bind = op.get_bind()
    for enum_type in (user_role, product_type, reception_status, pvz_city):
        enum_type.drop(bind, checkfirst=True)
