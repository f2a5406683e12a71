"""Load sample data

Revision ID: 20261018_0002
Revises: 20261018_0001
Create Date: 2026-10-18 00:01:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from rentaldb.seed_data import SAMPLE
from rentaldb.services.seed import sample_rows


# revision identifiers, used by Alembic.
revision: str = '20261018_0002'
down_revision: Union[str, None] = '20261018_0001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# parents first
TABLE_ORDER = [
    'users', 'locations', 'property_types', 'amenities', 'properties', 'property_amenities',
    'bookings', 'payment_methods', 'payments', 'reviews', 'messages',
]


def upgrade() -> None:
    bind = op.get_bind()

    # Databases that already hold users keep their data untouched
    if bind.execute(sa.text("SELECT COUNT(*) FROM users")).scalar():
        return

    rows = sample_rows()
    metadata = sa.MetaData()
    for name in TABLE_ORDER:
        table = sa.Table(name, metadata, autoload_with=bind)
        op.bulk_insert(table, rows[name])


def downgrade() -> None:
    bind = op.get_bind()
    for name in reversed(TABLE_ORDER):
        if name == 'property_amenities':
            ids = [row['id'] for row in SAMPLE['properties']]
            table = sa.table(name, sa.column('property_id'))
            bind.execute(table.delete().where(table.c.property_id.in_(ids)))
            continue
        ids = [row['id'] for row in SAMPLE[name]]
        table = sa.table(name, sa.column('id'))
        bind.execute(table.delete().where(table.c.id.in_(ids)))
