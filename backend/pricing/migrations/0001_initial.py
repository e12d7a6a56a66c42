import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
        ('agencies', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='PricingAgreement',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('price_in_cents', models.IntegerField()),
                ('is_active', models.BooleanField(default=True)),
                ('effective_from', models.DateTimeField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('buyer_agency', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='agreements_as_buyer', to='agencies.agency')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='pricing_agreements', to='core.product')),
                ('seller_agency', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='agreements_as_seller', to='agencies.agency')),
                ('service', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='pricing_agreements', to='core.service')),
            ],
            options={
                'db_table': 'pricing_agreements',
            },
        ),
        migrations.CreateModel(
            name='ShippingRate',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('price_in_cents', models.IntegerField()),
                ('scope', models.CharField(choices=[('PUBLIC', 'Public'), ('PRIVATE', 'Private')], default='PUBLIC', max_length=16)),
                ('is_active', models.BooleanField(default=True)),
                ('effective_from', models.DateTimeField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('agency', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='shipping_rates', to='agencies.agency')),
                ('pricing_agreement', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='shipping_rates', to='pricing.pricingagreement')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='shipping_rates', to='core.product')),
                ('service', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='shipping_rates', to='core.service')),
            ],
            options={
                'db_table': 'shipping_rates',
            },
        ),
        migrations.CreateModel(
            name='DeliveryRate',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('forwarder_id', models.BigIntegerField(blank=True, db_index=True, null=True)),
                ('city_type', models.CharField(blank=True, max_length=16, null=True)),
                ('rate_in_cents', models.IntegerField()),
                ('cost_in_cents', models.IntegerField(default=0)),
                ('is_base_rate', models.BooleanField(default=False)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('agency', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='delivery_rates', to='agencies.agency')),
                ('carrier', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='delivery_rates', to='core.carrier')),
                ('city', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='delivery_rates', to='core.city')),
            ],
            options={
                'db_table': 'delivery_rates',
            },
        ),
        migrations.AddConstraint(
            model_name='pricingagreement',
            constraint=models.UniqueConstraint(fields=('seller_agency', 'buyer_agency', 'product', 'service'), name='uniq_pricing_agreement_tuple'),
        ),
        migrations.AddConstraint(
            model_name='pricingagreement',
            constraint=models.CheckConstraint(check=models.Q(('price_in_cents__gte', 0)), name='pricing_agreement_price_non_negative'),
        ),
        migrations.AddIndex(
            model_name='shippingrate',
            index=models.Index(fields=['service', 'agency'], name='idx_shipping_rate_svc_agency'),
        ),
        migrations.AddConstraint(
            model_name='shippingrate',
            constraint=models.CheckConstraint(check=models.Q(('price_in_cents__gte', 0)), name='shipping_rate_price_non_negative'),
        ),
        migrations.AddConstraint(
            model_name='deliveryrate',
            constraint=models.CheckConstraint(check=models.Q(models.Q(('agency__isnull', True), ('is_base_rate', True)), models.Q(('agency__isnull', False), ('is_base_rate', False)), _connector='OR'), name='delivery_rate_base_has_no_agency'),
        ),
        migrations.AddConstraint(
            model_name='deliveryrate',
            constraint=models.CheckConstraint(check=models.Q(('city__isnull', False), ('city_type__isnull', False), _connector='OR'), name='delivery_rate_city_or_type'),
        ),
        migrations.AddConstraint(
            model_name='deliveryrate',
            constraint=models.CheckConstraint(check=models.Q(('rate_in_cents__gte', 0), ('cost_in_cents__gte', 0)), name='delivery_rate_amounts_non_negative'),
        ),
    ]
