from django.db import models
from django.db.models import Q


class RateScope:
    PUBLIC = "PUBLIC"
    PRIVATE = "PRIVATE"

    CHOICES = [
        (PUBLIC, "Public"),
        (PRIVATE, "Private"),
    ]


class PricingAgreement(models.Model):
    """Wholesale cost a seller agency charges a buyer agency for a product/service."""

    id = models.BigAutoField(primary_key=True)
    seller_agency = models.ForeignKey('agencies.Agency', models.PROTECT, related_name='agreements_as_seller')
    buyer_agency = models.ForeignKey('agencies.Agency', models.PROTECT, related_name='agreements_as_buyer')
    product = models.ForeignKey('core.Product', models.PROTECT, related_name='pricing_agreements')
    service = models.ForeignKey('core.Service', models.PROTECT, related_name='pricing_agreements')
    # cost to the buyer
    price_in_cents = models.IntegerField()
    is_active = models.BooleanField(default=True)
    effective_from = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'pricing_agreements'
        constraints = [
            models.UniqueConstraint(
                fields=['seller_agency', 'buyer_agency', 'product', 'service'],
                name='uniq_pricing_agreement_tuple',
            ),
            models.CheckConstraint(check=Q(price_in_cents__gte=0), name='pricing_agreement_price_non_negative'),
        ]

    def __str__(self):
        return f"{self.seller_agency_id}->{self.buyer_agency_id} p{self.product_id}/s{self.service_id}: {self.price_in_cents}"

    @property
    def is_internal(self) -> bool:
        return self.seller_agency_id == self.buyer_agency_id


class ShippingRate(models.Model):
    """Sell price of the buyer agency, linked to the agreement it was created with."""

    id = models.BigAutoField(primary_key=True)
    product = models.ForeignKey('core.Product', models.PROTECT, related_name='shipping_rates')
    service = models.ForeignKey('core.Service', models.PROTECT, related_name='shipping_rates')
    agency = models.ForeignKey('agencies.Agency', models.PROTECT, related_name='shipping_rates')
    pricing_agreement = models.ForeignKey('pricing.PricingAgreement', models.PROTECT, related_name='shipping_rates')
    price_in_cents = models.IntegerField()
    scope = models.CharField(max_length=16, choices=RateScope.CHOICES, default=RateScope.PUBLIC)
    is_active = models.BooleanField(default=True)
    effective_from = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'shipping_rates'
        constraints = [
            models.CheckConstraint(check=Q(price_in_cents__gte=0), name='shipping_rate_price_non_negative'),
        ]
        indexes = [
            models.Index(fields=['service', 'agency'], name='idx_shipping_rate_svc_agency'),
        ]

    def __str__(self):
        return f"rate {self.id} agency {self.agency_id}: {self.price_in_cents}"


class DeliveryRate(models.Model):
    """
    Home delivery price for a carrier in a city (or any city of a city type).
    Base rates belong to the forwarder (agency is null); agency rates override them.
    """

    id = models.BigAutoField(primary_key=True)
    agency = models.ForeignKey('agencies.Agency', models.CASCADE, related_name='delivery_rates', blank=True, null=True)
    forwarder_id = models.BigIntegerField(blank=True, null=True, db_index=True)
    carrier = models.ForeignKey('core.Carrier', models.PROTECT, related_name='delivery_rates')
    city = models.ForeignKey('core.City', models.PROTECT, related_name='delivery_rates', blank=True, null=True)
    city_type = models.CharField(max_length=16, blank=True, null=True)
    rate_in_cents = models.IntegerField()
    cost_in_cents = models.IntegerField(default=0)
    is_base_rate = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'delivery_rates'
        constraints = [
            models.CheckConstraint(
                check=Q(is_base_rate=True, agency__isnull=True) | Q(is_base_rate=False, agency__isnull=False),
                name='delivery_rate_base_has_no_agency',
            ),
            models.CheckConstraint(
                check=Q(city__isnull=False) | Q(city_type__isnull=False),
                name='delivery_rate_city_or_type',
            ),
            models.CheckConstraint(
                check=Q(rate_in_cents__gte=0) & Q(cost_in_cents__gte=0),
                name='delivery_rate_amounts_non_negative',
            ),
        ]

    def __str__(self):
        target = f"city {self.city_id}" if self.city_id else f"type {self.city_type}"
        owner = f"agency {self.agency_id}" if self.agency_id else f"base fwd {self.forwarder_id}"
        return f"{owner} carrier {self.carrier_id} {target}: {self.rate_in_cents}"
