from types import SimpleNamespace

import pytest
from rest_framework.test import APIClient

from accounts.models import CustomUser, Roles
from agencies.models import Agency, AgencyType
from core.models import Carrier, City, CityType, Product, Province, Service, ServiceType


@pytest.fixture
def agency_chain(db):
    """forwarder -> reseller -> agency"""
    forwarder = Agency.objects.create(name="Forwarder", agency_type=AgencyType.FORWARDER)
    reseller = Agency.objects.create(name="Reseller", agency_type=AgencyType.RESELLER, parent_agency=forwarder)
    agency = Agency.objects.create(name="Agency", agency_type=AgencyType.AGENCY, parent_agency=reseller)
    return SimpleNamespace(forwarder=forwarder, reseller=reseller, agency=agency)


@pytest.fixture
def catalog(db, agency_chain):
    carrier = Carrier.objects.create(name="Carrier X")
    service = Service.objects.create(
        name="Air", carrier=carrier, forwarder_id=agency_chain.forwarder.id, service_type=ServiceType.AIR
    )
    product = Product.objects.create(name="General cargo")
    province = Province.objects.create(name="Province")
    city = City.objects.create(province=province, name="City Y", city_type=CityType.CAPITAL)
    return SimpleNamespace(carrier=carrier, service=service, product=product, province=province, city=city)


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role=Roles.USER, agency=None, carrier=None, username=None):
        counter["n"] += 1
        username = username or f"{role.lower()}_{counter['n']}"
        return CustomUser.objects.create_user(
            username=username,
            email=f"{username}@example.com",
            password="pass-1234",
            role=role,
            agency=agency,
            carrier=carrier,
        )

    return _make


@pytest.fixture
def client_for():
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return _client
