import pytest

from accounts.models import CustomUser, Roles
from agencies.models import Agency, AgencyType
from pricing.dataclasses import PricingInput
from pricing.services.pricing_service import create_pricing_with_rate

pytestmark = pytest.mark.django_db


def _create_payload(name="New Agency", **overrides):
    payload = {
        "name": name,
        "contact": "Jane",
        "admin_user": {
            "username": f"{name.lower().replace(' ', '_')}_admin",
            "email": f"{name.lower().replace(' ', '_')}@example.com",
            "password": "longenough",
        },
    }
    payload.update(overrides)
    return payload


class TestCreateChildAgency:
    def test_reseller_admin_creates_agency_under_itself(self, agency_chain, make_user, client_for):
        client = client_for(make_user(Roles.AGENCY_ADMIN, agency=agency_chain.reseller))
        resp = client.post(
            "/api/v1/agencies",
            _create_payload(agency_type=AgencyType.RESELLER, parent_agency_id=agency_chain.forwarder.id),
            format="json",
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["agency"]["parent_agency"] == agency_chain.reseller.id
        assert body["agency"]["agency_type"] == AgencyType.AGENCY
        assert body["agency"]["forwarder_id"] == agency_chain.forwarder.id
        admin = CustomUser.objects.get(pk=body["admin_user"]["id"])
        assert admin.role == Roles.AGENCY_ADMIN
        assert admin.agency_id == body["agency"]["id"]

    def test_forwarder_agency_admin_defaults_parent_to_forwarder(self, agency_chain, make_user, client_for):
        client = client_for(make_user(Roles.AGENCY_ADMIN, agency=agency_chain.forwarder))
        resp = client.post("/api/v1/agencies", _create_payload(agency_type=AgencyType.RESELLER), format="json")
        assert resp.status_code == 201
        assert resp.json()["agency"]["parent_agency"] == agency_chain.forwarder.id
        assert resp.json()["agency"]["agency_type"] == AgencyType.RESELLER

    def test_plain_agency_cannot_create_children(self, agency_chain, make_user, client_for):
        client = client_for(make_user(Roles.AGENCY_ADMIN, agency=agency_chain.agency))
        resp = client.post("/api/v1/agencies", _create_payload(), format="json")
        assert resp.status_code == 403
        assert not Agency.objects.filter(name="New Agency").exists()

    def test_admin_must_pick_a_valid_parent(self, agency_chain, make_user, client_for):
        client = client_for(make_user(Roles.ADMINISTRATOR))
        resp = client.post(
            "/api/v1/agencies", _create_payload(parent_agency_id=agency_chain.agency.id), format="json"
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "Parent agency must be a FORWARDER or RESELLER"

    def test_duplicate_admin_username_rolls_back_agency(self, agency_chain, make_user, client_for):
        make_user(Roles.USER, username="taken")
        client = client_for(make_user(Roles.ROOT))
        payload = _create_payload(parent_agency_id=agency_chain.forwarder.id)
        payload["admin_user"]["username"] = "taken"
        resp = client.post("/api/v1/agencies", payload, format="json")
        assert resp.status_code == 409
        assert not Agency.objects.filter(name="New Agency").exists()

    def test_sales_cannot_create(self, agency_chain, make_user, client_for):
        client = client_for(make_user(Roles.AGENCY_SALES, agency=agency_chain.forwarder))
        assert client.post("/api/v1/agencies", _create_payload(), format="json").status_code == 403


class TestAgencyReads:
    def test_list_is_scoped(self, agency_chain, make_user, client_for):
        Agency.objects.create(name="Elsewhere", agency_type=AgencyType.FORWARDER)
        client = client_for(make_user(Roles.AGENCY_SALES, agency=agency_chain.reseller))
        names = [a["name"] for a in client.get("/api/v1/agencies").json()]
        assert sorted(names) == ["Agency", "Reseller"]

    def test_detail_outside_scope(self, agency_chain, make_user, client_for):
        client = client_for(make_user(Roles.AGENCY_SALES, agency=agency_chain.agency))
        assert client.get(f"/api/v1/agencies/{agency_chain.forwarder.id}").status_code == 403
        assert client.get(f"/api/v1/agencies/{agency_chain.agency.id}").status_code == 200

    def test_children_and_parent(self, agency_chain, make_user, client_for):
        client = client_for(make_user(Roles.ROOT))
        children = client.get(f"/api/v1/agencies/{agency_chain.forwarder.id}/children").json()
        assert [c["id"] for c in children] == [agency_chain.reseller.id]
        parent = client.get(f"/api/v1/agencies/{agency_chain.agency.id}/parent").json()
        assert parent["id"] == agency_chain.reseller.id
        root_parent = client.get(f"/api/v1/agencies/{agency_chain.forwarder.id}/parent")
        assert root_parent.status_code == 200
        assert root_parent["Content-Type"] == "application/json"
        assert root_parent.content == b"null"

    def test_patch(self, agency_chain, make_user, client_for):
        client = client_for(make_user(Roles.AGENCY_ADMIN, agency=agency_chain.agency))
        resp = client.patch(
            f"/api/v1/agencies/{agency_chain.agency.id}", {"phone": "555", "agency_type": "FORWARDER"}, format="json"
        )
        assert resp.status_code == 200
        agency = Agency.objects.get(pk=agency_chain.agency.id)
        assert agency.phone == "555"
        assert agency.agency_type == AgencyType.AGENCY

    def test_patch_name_conflict(self, agency_chain, make_user, client_for):
        client = client_for(make_user(Roles.ROOT))
        resp = client.patch(f"/api/v1/agencies/{agency_chain.agency.id}", {"name": "Reseller"}, format="json")
        assert resp.status_code == 409

    def test_services_with_rates(self, agency_chain, catalog, make_user, client_for):
        create_pricing_with_rate(PricingInput(
            product_id=catalog.product.id,
            service_id=catalog.service.id,
            seller_agency_id=agency_chain.reseller.id,
            buyer_agency_id=agency_chain.agency.id,
            cost_in_cents=500,
            price_in_cents=800,
        ))
        client = client_for(make_user(Roles.ROOT))
        data = client.get(f"/api/v1/agencies/{agency_chain.agency.id}/services-with-rates").json()
        assert data[0]["id"] == catalog.service.id
        assert data[0]["rates"][0]["price_in_cents"] == 800
