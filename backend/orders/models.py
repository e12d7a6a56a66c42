from django.conf import settings
from django.db import models


class ParcelStatus:
    IN_AGENCY = "IN_AGENCY"
    IN_PALLET = "IN_PALLET"
    IN_DISPATCH = "IN_DISPATCH"
    RECEIVED_IN_DISPATCH = "RECEIVED_IN_DISPATCH"
    IN_WAREHOUSE = "IN_WAREHOUSE"
    IN_CONTAINER = "IN_CONTAINER"
    IN_TRANSIT = "IN_TRANSIT"
    AT_PORT_OF_ENTRY = "AT_PORT_OF_ENTRY"
    CUSTOMS_INSPECTION = "CUSTOMS_INSPECTION"
    RELEASED_FROM_CUSTOMS = "RELEASED_FROM_CUSTOMS"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    FAILED_DELIVERY = "FAILED_DELIVERY"
    DELIVERED = "DELIVERED"
    RETURNED_TO_SENDER = "RETURNED_TO_SENDER"

    # order-only
    PARTIALLY_IN_PALLET = "PARTIALLY_IN_PALLET"
    PARTIALLY_IN_DISPATCH = "PARTIALLY_IN_DISPATCH"
    PARTIALLY_IN_CONTAINER = "PARTIALLY_IN_CONTAINER"
    PARTIALLY_IN_TRANSIT = "PARTIALLY_IN_TRANSIT"
    PARTIALLY_AT_PORT = "PARTIALLY_AT_PORT"
    PARTIALLY_IN_CUSTOMS = "PARTIALLY_IN_CUSTOMS"
    PARTIALLY_RELEASED = "PARTIALLY_RELEASED"
    PARTIALLY_OUT_FOR_DELIVERY = "PARTIALLY_OUT_FOR_DELIVERY"
    PARTIALLY_DELIVERED = "PARTIALLY_DELIVERED"

    # least -> most advanced
    BASE = [
        IN_AGENCY,
        IN_PALLET,
        IN_DISPATCH,
        RECEIVED_IN_DISPATCH,
        IN_WAREHOUSE,
        IN_CONTAINER,
        IN_TRANSIT,
        AT_PORT_OF_ENTRY,
        CUSTOMS_INSPECTION,
        RELEASED_FROM_CUSTOMS,
        OUT_FOR_DELIVERY,
        FAILED_DELIVERY,
        DELIVERED,
        RETURNED_TO_SENDER,
    ]

    PARTIAL = {
        IN_PALLET: PARTIALLY_IN_PALLET,
        IN_DISPATCH: PARTIALLY_IN_DISPATCH,
        RECEIVED_IN_DISPATCH: PARTIALLY_IN_DISPATCH,
        IN_CONTAINER: PARTIALLY_IN_CONTAINER,
        IN_TRANSIT: PARTIALLY_IN_TRANSIT,
        AT_PORT_OF_ENTRY: PARTIALLY_AT_PORT,
        CUSTOMS_INSPECTION: PARTIALLY_IN_CUSTOMS,
        RELEASED_FROM_CUSTOMS: PARTIALLY_RELEASED,
        OUT_FOR_DELIVERY: PARTIALLY_OUT_FOR_DELIVERY,
        DELIVERED: PARTIALLY_DELIVERED,
    }

    READY_FOR_DISPATCH = (IN_AGENCY, IN_PALLET, IN_DISPATCH, IN_WAREHOUSE)
    READY_FOR_CONTAINER = (IN_AGENCY, IN_PALLET, IN_DISPATCH, RECEIVED_IN_DISPATCH, IN_WAREHOUSE)

    PARCEL_CHOICES = [(s, s.replace("_", " ").capitalize()) for s in BASE]
    ORDER_CHOICES = PARCEL_CHOICES + [
        (s, s.replace("_", " ").capitalize()) for s in sorted(set(PARTIAL.values()))
    ]


class Order(models.Model):
    id = models.BigAutoField(primary_key=True)
    agency = models.ForeignKey('agencies.Agency', models.PROTECT, related_name='orders')
    service = models.ForeignKey('core.Service', models.PROTECT, related_name='orders', blank=True, null=True)
    # derived from parcels; recomputed by update_order_status_from_parcels
    status = models.CharField(max_length=32, choices=ParcelStatus.ORDER_CHOICES, default=ParcelStatus.IN_AGENCY)
    status_details = models.TextField(blank=True, default='')
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, models.SET_NULL, related_name='orders', blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'

    def __str__(self):
        return f"Order {self.id} ({self.status})"


class Parcel(models.Model):
    id = models.BigAutoField(primary_key=True)
    order = models.ForeignKey('orders.Order', models.CASCADE, related_name='parcels')
    hbl = models.CharField(max_length=64, unique=True)
    description = models.TextField(blank=True, default='')
    weight = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    agency = models.ForeignKey('agencies.Agency', models.PROTECT, related_name='parcels')
    service = models.ForeignKey('core.Service', models.PROTECT, related_name='parcels', blank=True, null=True)
    forwarder_id = models.BigIntegerField(blank=True, null=True, db_index=True)
    status = models.CharField(max_length=32, choices=ParcelStatus.PARCEL_CHOICES, default=ParcelStatus.IN_AGENCY)
    dispatch_id = models.BigIntegerField(blank=True, null=True)
    container_id = models.BigIntegerField(blank=True, null=True)
    container_name = models.CharField(max_length=255, blank=True, null=True)
    flight_id = models.BigIntegerField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'parcels'
        indexes = [
            models.Index(fields=['agency', 'status'], name='idx_parcel_agency_status'),
        ]

    def __str__(self):
        return f"{self.hbl} ({self.status})"


class ParcelEvent(models.Model):
    id = models.BigAutoField(primary_key=True)
    parcel = models.ForeignKey('orders.Parcel', models.CASCADE, related_name='events')
    status = models.CharField(max_length=32, choices=ParcelStatus.PARCEL_CHOICES)
    notes = models.TextField(blank=True, default='')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, models.SET_NULL, related_name='parcel_events', blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'parcel_events'
        ordering = ['created_at', 'id']
