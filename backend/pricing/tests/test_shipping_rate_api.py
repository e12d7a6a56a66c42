from django.test import TestCase
from rest_framework.test import APIClient

from accounts.models import CustomUser, Roles
from agencies.models import Agency, AgencyType
from core.models import Carrier, Product, Service
from pricing.models import PricingAgreement, ShippingRate


class ShippingRateApiTests(TestCase):
    def setUp(self):
        self.forwarder = Agency.objects.create(name="Forwarder", agency_type=AgencyType.FORWARDER)
        self.reseller = Agency.objects.create(
            name="Reseller", agency_type=AgencyType.RESELLER, parent_agency=self.forwarder
        )
        self.agency = Agency.objects.create(name="Agency", agency_type=AgencyType.AGENCY, parent_agency=self.reseller)
        carrier = Carrier.objects.create(name="Carrier")
        self.service = Service.objects.create(name="Air", carrier=carrier)
        self.product = Product.objects.create(name="Box")

        self.admin = CustomUser.objects.create_user(username="admin", password="pw", role=Roles.ADMINISTRATOR)
        self.client = APIClient()
        self.client.force_authenticate(user=self.admin)

    def _payload(self, **overrides):
        payload = {
            "product_id": self.product.id,
            "service_id": self.service.id,
            "seller_agency_id": self.reseller.id,
            "buyer_agency_id": self.agency.id,
            "cost_in_cents": 500,
            "price_in_cents": 800,
        }
        payload.update(overrides)
        return payload

    def test_create_then_duplicate(self):
        resp = self.client.post("/api/v1/shipping-rates", self._payload(), format="json")
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["data"]["agreement"]["price_in_cents"], 500)
        self.assertEqual(body["data"]["rate"]["price_in_cents"], 800)
        self.assertFalse(body["data"]["is_internal"])

        resp = self.client.post("/api/v1/shipping-rates", self._payload(), format="json")
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["source"], "application")
        self.assertEqual(PricingAgreement.objects.count(), 1)

    def test_price_below_cost_is_a_validation_error(self):
        resp = self.client.post(
            "/api/v1/shipping-rates", self._payload(cost_in_cents=900, price_in_cents=100), format="json"
        )
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertEqual(body["source"], "validation")
        self.assertEqual(body["code"], "VALIDATION_ERROR")
        self.assertEqual(body["errors"][0]["field"], "price_in_cents")
        self.assertFalse(ShippingRate.objects.exists())

    def test_internal_rate_for_reseller_is_rejected(self):
        resp = self.client.post(
            "/api/v1/shipping-rates", self._payload(buyer_agency_id=self.reseller.id), format="json"
        )
        self.assertEqual(resp.status_code, 400)

    def test_update_and_status_toggle(self):
        self.client.post("/api/v1/shipping-rates", self._payload(), format="json")
        rate = ShippingRate.objects.get()

        resp = self.client.put(
            f"/api/v1/shipping-rates/{rate.id}", {"price_in_cents": 1000, "cost_in_cents": 700}, format="json"
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["data"]["pricing_agreement"]["price_in_cents"], 700)

        resp = self.client.patch(f"/api/v1/shipping-rates/{rate.id}/status", {"is_active": False}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertFalse(resp.json()["data"]["is_active"])

    def test_rates_by_service_and_agency(self):
        self.client.post("/api/v1/shipping-rates", self._payload(), format="json")
        resp = self.client.get(f"/api/v1/shipping-rates/service/{self.service.id}/agency/{self.agency.id}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(len(resp.json()), 1)
        self.assertEqual(resp.json()[0]["cost_in_cents"], 500)

        resp = self.client.get(f"/api/v1/shipping-rates/service/{self.service.id}/agency/{self.forwarder.id}")
        self.assertEqual(resp.json(), [])

    def test_agreement_listings(self):
        self.client.post("/api/v1/shipping-rates", self._payload(), format="json")
        resp = self.client.get(f"/api/v1/pricing/products/{self.product.id}/agreements")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()[0]["buyer_agency_name"], "Agency")

        resp = self.client.get(f"/api/v1/pricing/agencies/{self.reseller.id}/agreements", {"role": "seller"})
        self.assertEqual(len(resp.json()), 1)

    def test_unauthenticated(self):
        resp = APIClient().post("/api/v1/shipping-rates", self._payload(), format="json")
        self.assertIn(resp.status_code, (401, 403))
