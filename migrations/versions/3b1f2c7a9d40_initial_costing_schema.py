"""Initial costing schema

Revision ID: 3b1f2c7a9d40
Revises:
Create Date: 2026-10-19 10:12:44.118203

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b1f2c7a9d40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('ingredient',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=False),
        sa.Column('cost_per_unit', sa.Float(), nullable=False),
        sa.Column('global_ingredient_id', sa.String(length=64), nullable=True),
        sa.Column('stock_quantity', sa.Float(), nullable=True),
        sa.Column('min_stock_level', sa.Float(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_ingredient'))
    )
    with op.batch_alter_table('ingredient', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_ingredient_restaurant_id'), ['restaurant_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_ingredient_name'), ['name'], unique=False)
        batch_op.create_index(batch_op.f('ix_ingredient_global_ingredient_id'), ['global_ingredient_id'], unique=False)

    op.create_table('supplier',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_supplier'))
    )

    op.create_table('restaurant_supplier_link',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('supplier_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['supplier_id'], ['supplier.id'], name=op.f('fk_restaurant_supplier_link_supplier_id_supplier'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_restaurant_supplier_link'))
    )
    with op.batch_alter_table('restaurant_supplier_link', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_restaurant_supplier_link_restaurant_id'), ['restaurant_id'], unique=False)

    op.create_table('supplier_product',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('supplier_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=True),
        sa.Column('brand', sa.String(length=100), nullable=True),
        sa.Column('pack_size', sa.Float(), nullable=False),
        sa.Column('pack_unit', sa.String(length=20), nullable=False),
        sa.Column('global_ingredient_id', sa.String(length=64), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.ForeignKeyConstraint(['supplier_id'], ['supplier.id'], name=op.f('fk_supplier_product_supplier_id_supplier'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_supplier_product'))
    )
    with op.batch_alter_table('supplier_product', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_supplier_product_supplier_id'), ['supplier_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_supplier_product_global_ingredient_id'), ['global_ingredient_id'], unique=False)

    op.create_table('supplier_product_price',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('product_id', sa.Integer(), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('effective_from', sa.DateTime(), nullable=False),
        sa.Column('effective_to', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['product_id'], ['supplier_product.id'], name=op.f('fk_supplier_product_price_product_id_supplier_product'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_supplier_product_price'))
    )
    with op.batch_alter_table('supplier_product_price', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_supplier_product_price_product_id'), ['product_id'], unique=False)

    op.create_table('menu_item',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('costing_status', sa.String(length=20), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_menu_item'))
    )
    with op.batch_alter_table('menu_item', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_menu_item_restaurant_id'), ['restaurant_id'], unique=False)

    op.create_table('menu_item_ingredient',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('menu_item_id', sa.Integer(), nullable=False),
        sa.Column('ingredient_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Float(), nullable=False),
        sa.Column('piece_count', sa.Float(), nullable=True),
        sa.Column('supplier_name', sa.String(length=200), nullable=True),
        sa.Column('supplier_product_id', sa.String(length=64), nullable=True),
        sa.Column('unit_cost_cached', sa.Float(), nullable=True),
        sa.Column('currency', sa.String(length=3), nullable=True),
        sa.Column('last_priced_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['ingredient_id'], ['ingredient.id'], name=op.f('fk_menu_item_ingredient_ingredient_id_ingredient'), ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['menu_item_id'], ['menu_item.id'], name=op.f('fk_menu_item_ingredient_menu_item_id_menu_item'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_menu_item_ingredient')),
        sa.UniqueConstraint('menu_item_id', 'ingredient_id', name='uq_menu_item_ingredient')
    )
    with op.batch_alter_table('menu_item_ingredient', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_menu_item_ingredient_menu_item_id'), ['menu_item_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_menu_item_ingredient_ingredient_id'), ['ingredient_id'], unique=False)


def downgrade():
    op.drop_table('menu_item_ingredient')
    op.drop_table('menu_item')
    op.drop_table('supplier_product_price')
    op.drop_table('supplier_product')
    op.drop_table('restaurant_supplier_link')
    op.drop_table('supplier')
    op.drop_table('ingredient')
