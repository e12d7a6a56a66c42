import pytest

from accounts.models import Roles
from accounts.permissions import Caller
from agencies.models import Agency, AgencyType
from core.errors import AuthorizationError, ValidationError
from core.models import Service, ServiceType
from orders.models import Order, Parcel, ParcelEvent, ParcelStatus as S
from orders.services import get_order_status_summary, list_parcels, update_parcel_status

pytestmark = pytest.mark.django_db


def _mk_order(agency, statuses, service=None, prefix="HBL"):
    order = Order.objects.create(agency=agency, service=service)
    for i, status in enumerate(statuses):
        Parcel.objects.create(
            order=order,
            hbl=f"{prefix}-{order.id}-{i}",
            agency=agency,
            service=service,
            forwarder_id=agency.forwarder_id,
            status=status,
        )
    return order


class TestParcelListing:
    def test_agency_caller_sees_own_subtree_only(self, agency_chain, make_user):
        other = Agency.objects.create(name="Other forwarder", agency_type=AgencyType.FORWARDER)
        _mk_order(agency_chain.agency, [S.IN_AGENCY], prefix="MINE")
        _mk_order(other, [S.IN_AGENCY], prefix="THEIRS")

        user = make_user(Roles.AGENCY_ADMIN, agency=agency_chain.reseller)
        result = list_parcels(Caller.from_user(user), {})
        assert [p.hbl.split("-")[0] for p in result["rows"]] == ["MINE"]
        assert result["total"] == 1

    def test_root_sees_everything(self, agency_chain, make_user):
        other = Agency.objects.create(name="Other forwarder", agency_type=AgencyType.FORWARDER)
        _mk_order(agency_chain.agency, [S.IN_AGENCY])
        _mk_order(other, [S.IN_AGENCY])
        root = make_user(Roles.ROOT)
        assert list_parcels(Caller.from_user(root), {})["total"] == 2

    def test_ready_for_dispatch(self, agency_chain, make_user):
        order = _mk_order(agency_chain.agency, [S.IN_AGENCY, S.IN_TRANSIT, S.IN_WAREHOUSE])
        Parcel.objects.filter(order=order, status=S.IN_WAREHOUSE).update(dispatch_id=3)
        root = make_user(Roles.ROOT)
        rows = list_parcels(Caller.from_user(root), {"ready_for": "dispatch"})["rows"]
        assert [p.status for p in rows] == [S.IN_AGENCY]

    def test_ready_for_container_requires_maritime_and_same_forwarder(self, agency_chain, catalog, make_user):
        sea = Service.objects.create(
            name="Sea", carrier=catalog.carrier, forwarder_id=agency_chain.forwarder.id,
            service_type=ServiceType.MARITIME,
        )
        _mk_order(agency_chain.agency, [S.RECEIVED_IN_DISPATCH], service=sea, prefix="SEA")
        _mk_order(agency_chain.agency, [S.RECEIVED_IN_DISPATCH], service=catalog.service, prefix="AIR")
        other = Agency.objects.create(name="Other forwarder", agency_type=AgencyType.FORWARDER)
        _mk_order(other, [S.IN_AGENCY], service=sea, prefix="FOREIGN")

        user = make_user(Roles.FORWARDER_ADMIN, agency=agency_chain.forwarder)
        rows = list_parcels(Caller.from_user(user), {"ready_for": "container"})["rows"]
        assert [p.hbl.split("-")[0] for p in rows] == ["SEA"]

    def test_invalid_ready_for(self, agency_chain, make_user):
        root = make_user(Roles.ROOT)
        with pytest.raises(ValidationError):
            list_parcels(Caller.from_user(root), {"ready_for": "plane"})

    def test_pagination(self, agency_chain, make_user):
        _mk_order(agency_chain.agency, [S.IN_AGENCY] * 5)
        root = make_user(Roles.ROOT)
        result = list_parcels(Caller.from_user(root), {"page": "2", "limit": "2"})
        assert (result["total"], result["page"], result["limit"], len(result["rows"])) == (5, 2, 2, 2)

    def test_user_without_agency_is_rejected(self, make_user):
        user = make_user(Roles.AGENCY_SALES)
        with pytest.raises(ValidationError):
            list_parcels(Caller.from_user(user), {})


class TestParcelStatusUpdates:
    def test_update_records_event_and_refreshes_order(self, agency_chain, make_user):
        order = _mk_order(agency_chain.agency, [S.IN_AGENCY, S.IN_AGENCY])
        first = order.parcels.order_by("id").first()
        user = make_user(Roles.AGENCY_ADMIN, agency=agency_chain.agency)

        update_parcel_status(first.hbl, S.IN_DISPATCH, notes="picked", user=user, caller=Caller.from_user(user))

        order.refresh_from_db()
        assert order.status == S.PARTIALLY_IN_DISPATCH
        assert ParcelEvent.objects.filter(parcel=first, status=S.IN_DISPATCH).count() == 1

    def test_update_outside_scope_is_forbidden(self, agency_chain, make_user):
        other = Agency.objects.create(name="Other forwarder", agency_type=AgencyType.FORWARDER)
        order = _mk_order(other, [S.IN_AGENCY])
        user = make_user(Roles.AGENCY_ADMIN, agency=agency_chain.agency)
        with pytest.raises(AuthorizationError):
            update_parcel_status(order.parcels.first().hbl, S.IN_PALLET, caller=Caller.from_user(user))
        assert not ParcelEvent.objects.exists()

    def test_partial_status_is_not_a_parcel_status(self, agency_chain):
        order = _mk_order(agency_chain.agency, [S.IN_AGENCY])
        with pytest.raises(ValidationError):
            update_parcel_status(order.parcels.first().hbl, S.PARTIALLY_IN_DISPATCH)


class TestStatusSummaryEndpoint:
    def test_summary(self, agency_chain, make_user, client_for):
        order = _mk_order(agency_chain.agency, [S.IN_AGENCY, S.IN_TRANSIT])
        client = client_for(make_user(Roles.ROOT))
        resp = client.get(f"/api/v1/orders/{order.id}/status-summary")
        assert resp.status_code == 200
        assert resp.json() == {
            "order_status": S.PARTIALLY_IN_TRANSIT,
            "parcels_count": 2,
            "status_breakdown": {S.IN_AGENCY: 1, S.IN_TRANSIT: 1},
            "order_id": order.id,
        }

    def test_empty_order(self, agency_chain, make_user):
        order = Order.objects.create(agency=agency_chain.agency)
        summary = get_order_status_summary(order.id)
        assert summary["order_status"] == S.IN_AGENCY
        assert summary["parcels_count"] == 0

    def test_missing_order(self, make_user, client_for):
        resp = client_for(make_user(Roles.ROOT)).get("/api/v1/orders/999/status-summary")
        assert resp.status_code == 404
        assert resp.json()["source"] == "application"
