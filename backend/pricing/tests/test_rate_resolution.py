import pytest

from agencies.models import Agency
from core.errors import NotFoundError
from core.models import CityType, Service
from pricing.models import DeliveryRate
from pricing.services.rate_resolution import (
    calculate_delivery_fee,
    calculate_heavy_item_charge,
    resolve_delivery_rate,
)

pytestmark = pytest.mark.django_db


def _base_rate(forwarder, carrier, city=None, city_type=None, amount=500):
    return DeliveryRate.objects.create(
        agency=None, forwarder_id=forwarder.id, carrier=carrier, city=city, city_type=city_type,
        rate_in_cents=amount, cost_in_cents=amount // 2, is_base_rate=True,
    )


def _agency_rate(agency, carrier, city=None, city_type=None, amount=700):
    return DeliveryRate.objects.create(
        agency=agency, forwarder_id=agency.forwarder_id, carrier=carrier, city=city, city_type=city_type,
        rate_in_cents=amount, cost_in_cents=0,
    )


class TestInheritance:
    def test_leaf_inherits_forwarder_base_rate(self, agency_chain, catalog):
        _base_rate(agency_chain.forwarder, catalog.carrier, city=catalog.city, amount=500)
        resolved = resolve_delivery_rate(
            agency_chain.agency.id, catalog.carrier.id, catalog.city.id, catalog.city.city_type
        )
        assert resolved.rate_in_cents == 500
        assert resolved.is_inherited is True
        assert resolved.source_agency_id is None

    def test_own_rate_beats_ancestors(self, agency_chain, catalog):
        _base_rate(agency_chain.forwarder, catalog.carrier, city=catalog.city, amount=500)
        _agency_rate(agency_chain.reseller, catalog.carrier, city=catalog.city, amount=600)
        _agency_rate(agency_chain.agency, catalog.carrier, city=catalog.city, amount=900)
        resolved = resolve_delivery_rate(
            agency_chain.agency.id, catalog.carrier.id, catalog.city.id, catalog.city.city_type
        )
        assert (resolved.rate_in_cents, resolved.is_inherited, resolved.source_agency_id) == (
            900, False, agency_chain.agency.id,
        )

    def test_parent_rate_is_inherited(self, agency_chain, catalog):
        _base_rate(agency_chain.forwarder, catalog.carrier, city=catalog.city, amount=500)
        _agency_rate(agency_chain.reseller, catalog.carrier, city_type=CityType.CAPITAL, amount=650)
        resolved = resolve_delivery_rate(
            agency_chain.agency.id, catalog.carrier.id, catalog.city.id, catalog.city.city_type
        )
        assert resolved.rate_in_cents == 650
        assert resolved.is_inherited is True
        assert resolved.source_agency_id == agency_chain.reseller.id

    def test_city_specific_beats_city_type_at_same_level(self, agency_chain, catalog):
        _agency_rate(agency_chain.agency, catalog.carrier, city_type=CityType.CAPITAL, amount=300)
        _agency_rate(agency_chain.agency, catalog.carrier, city=catalog.city, amount=400)
        resolved = resolve_delivery_rate(
            agency_chain.agency.id, catalog.carrier.id, catalog.city.id, catalog.city.city_type
        )
        assert resolved.rate_in_cents == 400

    def test_city_specific_beats_city_type_at_parent_level(self, agency_chain, catalog):
        _agency_rate(agency_chain.reseller, catalog.carrier, city_type=CityType.CAPITAL, amount=310)
        _agency_rate(agency_chain.reseller, catalog.carrier, city=catalog.city, amount=410)
        resolved = resolve_delivery_rate(
            agency_chain.agency.id, catalog.carrier.id, catalog.city.id, catalog.city.city_type
        )
        assert resolved.rate_in_cents == 410
        assert resolved.source_agency_id == agency_chain.reseller.id

    def test_city_specific_beats_city_type_at_base_level(self, agency_chain, catalog):
        _base_rate(agency_chain.forwarder, catalog.carrier, city_type=CityType.CAPITAL, amount=320)
        _base_rate(agency_chain.forwarder, catalog.carrier, city=catalog.city, amount=420)
        resolved = resolve_delivery_rate(
            agency_chain.agency.id, catalog.carrier.id, catalog.city.id, catalog.city.city_type
        )
        assert resolved.rate_in_cents == 420
        assert resolved.source_agency_id is None

    def test_forwarder_base_rate_is_inherited_for_forwarder_itself(self, agency_chain, catalog):
        _base_rate(agency_chain.forwarder, catalog.carrier, city=catalog.city, amount=500)
        resolved = resolve_delivery_rate(
            agency_chain.forwarder.id, catalog.carrier.id, catalog.city.id, catalog.city.city_type
        )
        assert (resolved.rate_in_cents, resolved.cost_in_cents) == (500, 250)
        assert resolved.is_inherited is True
        assert resolved.source_agency_id is None

    def test_nearer_city_type_beats_farther_city_specific(self, agency_chain, catalog):
        _agency_rate(agency_chain.reseller, catalog.carrier, city=catalog.city, amount=800)
        _agency_rate(agency_chain.agency, catalog.carrier, city_type=CityType.CAPITAL, amount=350)
        resolved = resolve_delivery_rate(
            agency_chain.agency.id, catalog.carrier.id, catalog.city.id, catalog.city.city_type
        )
        assert resolved.rate_in_cents == 350
        assert resolved.is_inherited is False

    def test_inactive_rates_are_skipped(self, agency_chain, catalog):
        _base_rate(agency_chain.forwarder, catalog.carrier, city_type=CityType.CAPITAL, amount=500)
        rate = _agency_rate(agency_chain.agency, catalog.carrier, city=catalog.city, amount=900)
        rate.is_active = False
        rate.save()
        resolved = resolve_delivery_rate(
            agency_chain.agency.id, catalog.carrier.id, catalog.city.id, catalog.city.city_type
        )
        assert resolved.rate_in_cents == 500

    def test_no_rate_anywhere(self, agency_chain, catalog):
        with pytest.raises(NotFoundError, match=f"carrier {catalog.carrier.id}"):
            resolve_delivery_rate(
                agency_chain.agency.id, catalog.carrier.id, catalog.city.id, catalog.city.city_type
            )

    def test_cycle_is_not_followed_forever(self, agency_chain, catalog):
        Agency.objects.filter(pk=agency_chain.forwarder.id).update(parent_agency=agency_chain.agency)
        with pytest.raises(NotFoundError):
            resolve_delivery_rate(
                agency_chain.agency.id, catalog.carrier.id, catalog.city.id, catalog.city.city_type
            )


class TestDeliveryFee:
    def test_pickup_is_free(self, agency_chain, catalog):
        assert calculate_delivery_fee(catalog.service.id, catalog.city.id, agency_chain.agency.id, False) == 0

    def test_service_without_carrier_is_free(self, agency_chain, catalog):
        service = Service.objects.create(name="Own fleet", carrier=None)
        assert calculate_delivery_fee(service.id, catalog.city.id, agency_chain.agency.id) == 0

    def test_fee_uses_resolved_rate(self, agency_chain, catalog):
        _base_rate(agency_chain.forwarder, catalog.carrier, city_type=CityType.CAPITAL, amount=450)
        assert calculate_delivery_fee(catalog.service.id, catalog.city.id, agency_chain.agency.id) == 450

    def test_heavy_item_charge(self):
        assert calculate_heavy_item_charge(101) == 3000
        assert calculate_heavy_item_charge(100) == 0
        assert calculate_heavy_item_charge(150, requires_home_delivery=False) == 0


class TestResolveEndpoint:
    def test_resolve_reads_city_type_from_city(self, agency_chain, catalog, make_user, client_for):
        from accounts.models import Roles

        _base_rate(agency_chain.forwarder, catalog.carrier, city_type=CityType.CAPITAL, amount=450)
        client = client_for(make_user(Roles.ROOT))
        resp = client.get(
            "/api/v1/delivery-rates/resolve",
            {"agency_id": agency_chain.agency.id, "carrier_id": catalog.carrier.id, "city_id": catalog.city.id},
        )
        assert resp.status_code == 200
        assert resp.json() == {
            "rate_in_cents": 450,
            "cost_in_cents": 225,
            "is_inherited": True,
            "source_agency_id": None,
        }

    def test_resolve_is_limited_to_visible_agencies(self, agency_chain, catalog, make_user, client_for):
        from accounts.models import Roles

        _base_rate(agency_chain.forwarder, catalog.carrier, city_type=CityType.CAPITAL, amount=450)
        client = client_for(make_user(Roles.AGENCY_SALES, agency=agency_chain.agency))
        params = {"carrier_id": catalog.carrier.id, "city_id": catalog.city.id}

        own = client.get("/api/v1/delivery-rates/resolve", {**params, "agency_id": agency_chain.agency.id})
        assert own.status_code == 200
        other = client.get("/api/v1/delivery-rates/resolve", {**params, "agency_id": agency_chain.reseller.id})
        assert other.status_code == 403
