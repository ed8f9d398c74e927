"""
Initial migration for Stockkeeper models.
"""

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Stockkeeper models: Category, Product, SequenceCounter, StockAccount, StockMovement."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
                ('display_order', models.PositiveIntegerField(default=0, verbose_name='Display order')),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('parent', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='children', to='stockkeeper.category', verbose_name='Parent category')),
            ],
            options={
                'verbose_name': 'Category',
                'verbose_name_plural': 'Categories',
                'ordering': ['display_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=50, unique=True, verbose_name='Code')),
                ('name', models.CharField(max_length=200, verbose_name='Name')),
                ('unit_price', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name='Unit price')),
                ('cost_price', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name='Cost price')),
                ('is_active', models.BooleanField(default=True, verbose_name='Active')),
                ('deleted_at', models.DateTimeField(blank=True, null=True, verbose_name='Deleted at')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='products', to='stockkeeper.category', verbose_name='Category')),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['code'],
            },
        ),
        migrations.CreateModel(
            name='SequenceCounter',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('prefix', models.CharField(max_length=3, verbose_name='Prefix')),
                ('date_key', models.CharField(help_text='YYYYMMDD', max_length=8, verbose_name='Date')),
                ('last_value', models.PositiveIntegerField(default=0, verbose_name='Last issued')),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Sequence counter',
                'verbose_name_plural': 'Sequence counters',
                'ordering': ['-date_key', 'prefix'],
                'constraints': [models.UniqueConstraint(fields=('prefix', 'date_key'), name='unique_sequence_counter_prefix_date')],
            },
        ),
        migrations.CreateModel(
            name='StockAccount',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('current_stock', models.IntegerField(default=0, verbose_name='Current stock')),
                ('reserved_stock', models.PositiveIntegerField(default=0, verbose_name='Reserved stock')),
                ('minimum_stock', models.PositiveIntegerField(default=0, verbose_name='Minimum stock')),
                ('maximum_stock', models.PositiveIntegerField(blank=True, null=True, verbose_name='Maximum stock')),
                ('reorder_point', models.PositiveIntegerField(default=0, verbose_name='Reorder point')),
                ('warehouse_location', models.CharField(default='MAIN', max_length=50, verbose_name='Warehouse location')),
                ('last_stock_check_at', models.DateTimeField(blank=True, help_text='Set whenever an adjustment changes current stock.', null=True, verbose_name='Last stock change')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('product', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='stock_account', to='stockkeeper.product', verbose_name='Product')),
            ],
            options={
                'verbose_name': 'Stock account',
                'verbose_name_plural': 'Stock accounts',
                'constraints': [models.CheckConstraint(condition=models.Q(('current_stock__gte', 0)), name='stock_account_current_stock_non_negative')],
            },
        ),
        migrations.CreateModel(
            name='StockMovement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('movement_type', models.CharField(choices=[('IN', 'In'), ('OUT', 'Out'), ('ADJUST', 'Adjustment'), ('TRANSFER', 'Transfer')], max_length=10, verbose_name='Movement type')),
                ('quantity', models.PositiveIntegerField(help_text='Magnitude; the direction comes from the movement type.', verbose_name='Quantity')),
                ('delta', models.IntegerField(help_text='Positive = entry, negative = exit', verbose_name='Delta')),
                ('unit_cost', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name='Unit cost')),
                ('reference_type', models.CharField(choices=[('ORDER', 'Order'), ('PURCHASE', 'Purchase'), ('ADJUSTMENT', 'Adjustment'), ('RETURN', 'Return'), ('INITIAL', 'Initial stock'), ('MANUAL', 'Manual')], default='ADJUSTMENT', max_length=20, verbose_name='Reference type')),
                ('reference_id', models.CharField(blank=True, default='', max_length=64, verbose_name='Reference ID')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Notes')),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Created at')),
                ('actor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Actor')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='stock_movements', to='stockkeeper.product', verbose_name='Product')),
            ],
            options={
                'verbose_name': 'Stock movement',
                'verbose_name_plural': 'Stock movements',
                'ordering': ['created_at', 'id'],
                'indexes': [models.Index(fields=['product', 'created_at'], name='stock_movement_product_created')],
                'constraints': [models.CheckConstraint(condition=models.Q(('quantity__gt', 0)), name='stock_movement_quantity_positive')],
            },
        ),
    ]
