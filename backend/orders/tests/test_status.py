from django.test import SimpleTestCase

from orders.models import ParcelStatus as S
from orders.status import build_order_status_details, calculate_order_status, summarize


class CalculateOrderStatusTests(SimpleTestCase):
    def test_empty_order_is_in_agency(self):
        self.assertEqual(calculate_order_status([]), S.IN_AGENCY)

    def test_all_parcels_share_status(self):
        self.assertEqual(calculate_order_status([S.IN_TRANSIT, S.IN_TRANSIT]), S.IN_TRANSIT)

    def test_mixed_statuses_report_partial_of_most_advanced(self):
        self.assertEqual(
            calculate_order_status([S.IN_AGENCY, S.IN_DISPATCH, S.IN_DISPATCH]),
            S.PARTIALLY_IN_DISPATCH,
        )

    def test_mixed_with_delivered(self):
        self.assertEqual(calculate_order_status([S.DELIVERED, S.IN_TRANSIT]), S.PARTIALLY_DELIVERED)

    def test_unknown_statuses_are_ignored(self):
        self.assertEqual(calculate_order_status(["BOGUS", S.IN_PALLET]), S.IN_PALLET)

    def test_order_independent(self):
        a = calculate_order_status([S.IN_WAREHOUSE, S.IN_AGENCY, S.IN_CONTAINER])
        b = calculate_order_status([S.IN_CONTAINER, S.IN_WAREHOUSE, S.IN_AGENCY])
        self.assertEqual(a, b)


class StatusDetailsTests(SimpleTestCase):
    def test_single_parcel_in_agency(self):
        self.assertEqual(build_order_status_details([{"dispatch_id": None, "container_id": None}]), "In agency")

    def test_all_in_agency(self):
        rows = [{"dispatch_id": None, "container_id": None}] * 3
        self.assertEqual(build_order_status_details(rows), "All in agency")

    def test_mixed_dispatch_and_agency(self):
        rows = [
            {"dispatch_id": 5, "container_id": None},
            {"dispatch_id": None, "container_id": None},
            {"dispatch_id": 5, "container_id": None},
        ]
        self.assertEqual(build_order_status_details(rows), "1 in agency, 2 in Dispatch #5")

    def test_all_in_named_container(self):
        rows = [
            {"dispatch_id": 5, "container_id": 9, "container_name": "MSKU-1"},
            {"dispatch_id": None, "container_id": 9, "container_name": "MSKU-1"},
        ]
        self.assertEqual(build_order_status_details(rows), "All in Container MSKU-1")

    def test_no_parcels(self):
        self.assertEqual(build_order_status_details([]), "")


class SummarizeTests(SimpleTestCase):
    def test_summary_shape(self):
        summary = summarize([S.IN_AGENCY, S.IN_DISPATCH], order_id=7)
        self.assertEqual(
            summary,
            {
                "order_status": S.PARTIALLY_IN_DISPATCH,
                "parcels_count": 2,
                "status_breakdown": {S.IN_AGENCY: 1, S.IN_DISPATCH: 1},
                "order_id": 7,
            },
        )

    def test_empty_summary(self):
        self.assertEqual(
            summarize([]),
            {"order_status": S.IN_AGENCY, "parcels_count": 0, "status_breakdown": {}},
        )
