from rest_framework import status, views
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import Caller
from agencies.services import get_visible_agency
from core.models import City

from .dataclasses import PricingInput, RateUpdate
from .serializers import (
    DeliveryRateResolveSerializer,
    PricingAgreementDetailSerializer,
    PricingAgreementSerializer,
    ShippingRateCreateSerializer,
    ShippingRateSerializer,
    ShippingRateUpdateSerializer,
)
from .services.pricing_service import (
    authorize_pricing_creation,
    create_pricing_with_rate,
    get_agency_pricing,
    get_product_pricing,
    get_rates_by_service_id_and_agency_id,
    toggle_rate_status,
    update_shipping_rate,
)
from .services.rate_resolution import resolve_delivery_rate


class ShippingRateCreateView(views.APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        ser = ShippingRateCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        inp = PricingInput(**ser.validated_data)
        authorize_pricing_creation(Caller.from_user(request.user), inp)
        result = create_pricing_with_rate(inp)
        return Response(
            {
                "message": "Shipping rate created successfully",
                "data": {
                    "agreement": PricingAgreementSerializer(result.agreement).data,
                    "rate": ShippingRateSerializer(result.rate).data,
                    "is_internal": result.is_internal,
                },
            },
            status=status.HTTP_201_CREATED,
        )


class ShippingRateDetailView(views.APIView):
    permission_classes = [IsAuthenticated]

    def put(self, request, id):
        ser = ShippingRateUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        result = update_shipping_rate(Caller.from_user(request.user), id, RateUpdate(**ser.validated_data))
        return Response(
            {
                "message": "Shipping rate updated successfully",
                "data": {
                    "shipping_rate": ShippingRateSerializer(result.rate).data,
                    "pricing_agreement": PricingAgreementSerializer(result.agreement).data,
                },
            },
            status=status.HTTP_200_OK,
        )


class ShippingRateStatusView(views.APIView):
    permission_classes = [IsAuthenticated]

    def patch(self, request, id):
        is_active = request.data.get("is_active")
        rate = toggle_rate_status(Caller.from_user(request.user), id, is_active)
        return Response(
            {
                "message": f"Shipping rate {'enabled' if rate.is_active else 'disabled'} successfully",
                "data": ShippingRateSerializer(rate).data,
            },
            status=status.HTTP_200_OK,
        )


class RatesByServiceAndAgencyView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, service_id, agency_id):
        return Response(get_rates_by_service_id_and_agency_id(service_id, agency_id), status=status.HTTP_200_OK)


class ProductAgreementsView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, product_id):
        rows = get_product_pricing(product_id)
        return Response(PricingAgreementDetailSerializer(rows, many=True).data, status=status.HTTP_200_OK)


class AgencyAgreementsView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, agency_id):
        get_visible_agency(Caller.from_user(request.user), agency_id)
        role = request.query_params.get("role", "buyer")
        rows = get_agency_pricing(agency_id, role)
        return Response(PricingAgreementDetailSerializer(rows, many=True).data, status=status.HTTP_200_OK)


class DeliveryRateResolveView(views.APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        ser = DeliveryRateResolveSerializer(data=request.query_params)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        get_visible_agency(Caller.from_user(request.user), data["agency_id"])
        city_id = data.get("city_id")
        city_type = data.get("city_type")
        if city_id is not None and not city_type:
            city_type = City.objects.filter(pk=city_id).values_list("city_type", flat=True).first()
        resolved = resolve_delivery_rate(data["agency_id"], data["carrier_id"], city_id, city_type)
        return Response(resolved.as_dict(), status=status.HTTP_200_OK)
