import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
        ('agencies', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('IN_AGENCY', 'In agency'), ('IN_PALLET', 'In pallet'), ('IN_DISPATCH', 'In dispatch'), ('RECEIVED_IN_DISPATCH', 'Received in dispatch'), ('IN_WAREHOUSE', 'In warehouse'), ('IN_CONTAINER', 'In container'), ('IN_TRANSIT', 'In transit'), ('AT_PORT_OF_ENTRY', 'At port of entry'), ('CUSTOMS_INSPECTION', 'Customs inspection'), ('RELEASED_FROM_CUSTOMS', 'Released from customs'), ('OUT_FOR_DELIVERY', 'Out for delivery'), ('FAILED_DELIVERY', 'Failed delivery'), ('DELIVERED', 'Delivered'), ('RETURNED_TO_SENDER', 'Returned to sender'), ('PARTIALLY_AT_PORT', 'Partially at port'), ('PARTIALLY_DELIVERED', 'Partially delivered'), ('PARTIALLY_IN_CONTAINER', 'Partially in container'), ('PARTIALLY_IN_CUSTOMS', 'Partially in customs'), ('PARTIALLY_IN_DISPATCH', 'Partially in dispatch'), ('PARTIALLY_IN_PALLET', 'Partially in pallet'), ('PARTIALLY_IN_TRANSIT', 'Partially in transit'), ('PARTIALLY_OUT_FOR_DELIVERY', 'Partially out for delivery'), ('PARTIALLY_RELEASED', 'Partially released')], default='IN_AGENCY', max_length=32)),
                ('status_details', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('agency', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='agencies.agency')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='orders', to=settings.AUTH_USER_MODEL)),
                ('service', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='core.service')),
            ],
            options={
                'db_table': 'orders',
            },
        ),
        migrations.CreateModel(
            name='Parcel',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('hbl', models.CharField(max_length=64, unique=True)),
                ('description', models.TextField(blank=True, default='')),
                ('weight', models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ('forwarder_id', models.BigIntegerField(blank=True, db_index=True, null=True)),
                ('status', models.CharField(choices=[('IN_AGENCY', 'In agency'), ('IN_PALLET', 'In pallet'), ('IN_DISPATCH', 'In dispatch'), ('RECEIVED_IN_DISPATCH', 'Received in dispatch'), ('IN_WAREHOUSE', 'In warehouse'), ('IN_CONTAINER', 'In container'), ('IN_TRANSIT', 'In transit'), ('AT_PORT_OF_ENTRY', 'At port of entry'), ('CUSTOMS_INSPECTION', 'Customs inspection'), ('RELEASED_FROM_CUSTOMS', 'Released from customs'), ('OUT_FOR_DELIVERY', 'Out for delivery'), ('FAILED_DELIVERY', 'Failed delivery'), ('DELIVERED', 'Delivered'), ('RETURNED_TO_SENDER', 'Returned to sender')], default='IN_AGENCY', max_length=32)),
                ('dispatch_id', models.BigIntegerField(blank=True, null=True)),
                ('container_id', models.BigIntegerField(blank=True, null=True)),
                ('container_name', models.CharField(blank=True, max_length=255, null=True)),
                ('flight_id', models.BigIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('agency', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='parcels', to='agencies.agency')),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='parcels', to='orders.order')),
                ('service', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='parcels', to='core.service')),
            ],
            options={
                'db_table': 'parcels',
            },
        ),
        migrations.CreateModel(
            name='ParcelEvent',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('IN_AGENCY', 'In agency'), ('IN_PALLET', 'In pallet'), ('IN_DISPATCH', 'In dispatch'), ('RECEIVED_IN_DISPATCH', 'Received in dispatch'), ('IN_WAREHOUSE', 'In warehouse'), ('IN_CONTAINER', 'In container'), ('IN_TRANSIT', 'In transit'), ('AT_PORT_OF_ENTRY', 'At port of entry'), ('CUSTOMS_INSPECTION', 'Customs inspection'), ('RELEASED_FROM_CUSTOMS', 'Released from customs'), ('OUT_FOR_DELIVERY', 'Out for delivery'), ('FAILED_DELIVERY', 'Failed delivery'), ('DELIVERED', 'Delivered'), ('RETURNED_TO_SENDER', 'Returned to sender')], max_length=32)),
                ('notes', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('parcel', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='events', to='orders.parcel')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='parcel_events', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'parcel_events',
                'ordering': ['created_at', 'id'],
            },
        ),
        migrations.AddIndex(
            model_name='parcel',
            index=models.Index(fields=['agency', 'status'], name='idx_parcel_agency_status'),
        ),
    ]
