import os

from django.core.management.base import BaseCommand
from django.db import transaction
from rest_framework.authtoken.models import Token

from accounts.models import CustomUser, Roles
from agencies.models import Agency, AgencyType
from core.models import Carrier, City, CityType, Product, ProductUnit, Province, Service, ServiceType
from pricing.models import DeliveryRate


class Command(BaseCommand):
    help = "Idempotently seed a demo forwarder -> reseller -> agency chain, reference data and one user per role."

    def add_arguments(self, parser):
        parser.add_argument("--password", default=os.getenv("DEMO_USER_PASS", "ChangeMe123!"))

    @transaction.atomic
    def handle(self, *args, **opts):
        password = opts["password"]

        forwarder, _ = Agency.objects.get_or_create(
            name="Demo Forwarder", defaults={"agency_type": AgencyType.FORWARDER}
        )
        reseller, _ = Agency.objects.get_or_create(
            name="Demo Reseller",
            defaults={"agency_type": AgencyType.RESELLER, "parent_agency": forwarder},
        )
        agency, _ = Agency.objects.get_or_create(
            name="Demo Agency",
            defaults={"agency_type": AgencyType.AGENCY, "parent_agency": reseller},
        )

        carrier, _ = Carrier.objects.get_or_create(name="Demo Carrier")
        Service.objects.get_or_create(
            name="Air Express",
            defaults={"carrier": carrier, "forwarder_id": forwarder.id, "service_type": ServiceType.AIR},
        )
        Service.objects.get_or_create(
            name="Sea Freight",
            defaults={"carrier": carrier, "forwarder_id": forwarder.id, "service_type": ServiceType.MARITIME},
        )
        Product.objects.get_or_create(name="General cargo", defaults={"unit": ProductUnit.PER_LB})

        province, _ = Province.objects.get_or_create(name="La Habana")
        capital, _ = City.objects.get_or_create(
            province=province, name="Plaza de la Revolucion", defaults={"city_type": CityType.CAPITAL}
        )
        DeliveryRate.objects.get_or_create(
            agency=None,
            forwarder_id=forwarder.id,
            carrier=carrier,
            city=None,
            city_type=CityType.CAPITAL,
            is_base_rate=True,
            defaults={"rate_in_cents": 500, "cost_in_cents": 300},
        )

        users = [
            ("demo_root", Roles.ROOT, None, None),
            ("demo_forwarder_admin", Roles.FORWARDER_ADMIN, forwarder, None),
            ("demo_reseller", Roles.FORWARDER_RESELLER, reseller, None),
            ("demo_agency_admin", Roles.AGENCY_ADMIN, agency, None),
            ("demo_sales", Roles.AGENCY_SALES, agency, None),
            ("demo_carrier_admin", Roles.CARRIER_ADMIN, None, carrier),
            ("demo_messenger", Roles.MESSENGER, None, carrier),
        ]
        for username, role, user_agency, user_carrier in users:
            user, created = CustomUser.objects.get_or_create(
                username=username,
                defaults={
                    "email": f"{username}@example.com",
                    "role": role,
                    "agency": user_agency,
                    "carrier": user_carrier,
                    "is_staff": role in Roles.ADMIN_ROLES,
                    "is_superuser": role == Roles.ROOT,
                },
            )
            if created:
                user.set_password(password)
                user.save()
                self.stdout.write(self.style.SUCCESS(f"Created {role} user '{username}'"))
            else:
                self.stdout.write(self.style.WARNING(f"User '{username}' already exists"))
            token, _ = Token.objects.get_or_create(user=user)
            self.stdout.write(f"  TOKEN {username}: {token.key}")

        self.stdout.write(self.style.SUCCESS("Demo data ready"))
