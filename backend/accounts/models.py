# backend/accounts/models.py

from django.contrib.auth.models import AbstractUser
from django.db import models


class Roles:
    ROOT = "ROOT"
    ADMINISTRATOR = "ADMINISTRATOR"
    FORWARDER_ADMIN = "FORWARDER_ADMIN"
    FORWARDER_RESELLER = "FORWARDER_RESELLER"
    AGENCY_SUPERVISOR = "AGENCY_SUPERVISOR"
    AGENCY_ADMIN = "AGENCY_ADMIN"
    AGENCY_SALES = "AGENCY_SALES"
    MESSENGER = "MESSENGER"
    USER = "USER"
    CARRIER_OWNER = "CARRIER_OWNER"
    CARRIER_ADMIN = "CARRIER_ADMIN"
    CARRIER_ISSUES_MANAGER = "CARRIER_ISSUES_MANAGER"
    CARRIER_WAREHOUSE_WORKER = "CARRIER_WAREHOUSE_WORKER"

    ADMIN_ROLES = (ROOT, ADMINISTRATOR)
    CARRIER_USER_ROLES = (
        CARRIER_OWNER,
        CARRIER_ADMIN,
        CARRIER_ISSUES_MANAGER,
        CARRIER_WAREHOUSE_WORKER,
        MESSENGER,
    )


class CustomUser(AbstractUser):
    ROLE_CHOICES = [
        (Roles.ROOT, 'Root'),
        (Roles.ADMINISTRATOR, 'Administrator'),
        (Roles.FORWARDER_ADMIN, 'Forwarder admin'),
        (Roles.FORWARDER_RESELLER, 'Forwarder reseller'),
        (Roles.AGENCY_SUPERVISOR, 'Agency supervisor'),
        (Roles.AGENCY_ADMIN, 'Agency admin'),
        (Roles.AGENCY_SALES, 'Agency sales'),
        (Roles.MESSENGER, 'Messenger'),
        (Roles.USER, 'User'),
        (Roles.CARRIER_OWNER, 'Carrier owner'),
        (Roles.CARRIER_ADMIN, 'Carrier admin'),
        (Roles.CARRIER_ISSUES_MANAGER, 'Carrier issues manager'),
        (Roles.CARRIER_WAREHOUSE_WORKER, 'Carrier warehouse worker'),
    ]
    role = models.CharField(max_length=32, choices=ROLE_CHOICES, default=Roles.USER)
    agency = models.ForeignKey('agencies.Agency', models.PROTECT, related_name='users', blank=True, null=True)
    carrier = models.ForeignKey('core.Carrier', models.PROTECT, related_name='users', blank=True, null=True)

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"
