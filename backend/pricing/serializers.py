from rest_framework import serializers

from core.models import CityType

from .models import PricingAgreement, ShippingRate


class ShippingRateSerializer(serializers.ModelSerializer):
    class Meta:
        model = ShippingRate
        fields = [
            "id", "product", "service", "agency", "pricing_agreement",
            "price_in_cents", "scope", "is_active", "effective_from",
            "created_at", "updated_at",
        ]


class PricingAgreementSerializer(serializers.ModelSerializer):
    is_internal = serializers.BooleanField(read_only=True)

    class Meta:
        model = PricingAgreement
        fields = [
            "id", "seller_agency", "buyer_agency", "product", "service",
            "price_in_cents", "is_active", "effective_from", "is_internal",
            "created_at", "updated_at",
        ]


class PricingAgreementDetailSerializer(PricingAgreementSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    service_name = serializers.CharField(source="service.name", read_only=True)
    seller_agency_name = serializers.CharField(source="seller_agency.name", read_only=True)
    buyer_agency_name = serializers.CharField(source="buyer_agency.name", read_only=True)
    shipping_rates = ShippingRateSerializer(many=True, read_only=True)

    class Meta(PricingAgreementSerializer.Meta):
        fields = PricingAgreementSerializer.Meta.fields + [
            "product_name", "service_name", "seller_agency_name", "buyer_agency_name", "shipping_rates",
        ]


class ShippingRateCreateSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
    service_id = serializers.IntegerField(min_value=1)
    seller_agency_id = serializers.IntegerField(min_value=1)
    buyer_agency_id = serializers.IntegerField(min_value=1)
    cost_in_cents = serializers.IntegerField(min_value=0)
    price_in_cents = serializers.IntegerField(min_value=0)
    is_active = serializers.BooleanField(required=False, default=True)

    def validate(self, attrs):
        if attrs["price_in_cents"] < attrs["cost_in_cents"]:
            raise serializers.ValidationError(
                {"price_in_cents": "price_in_cents must be greater than or equal to cost_in_cents"}
            )
        return attrs


class ShippingRateUpdateSerializer(serializers.Serializer):
    price_in_cents = serializers.IntegerField(min_value=0, required=False)
    cost_in_cents = serializers.IntegerField(min_value=0, required=False)
    is_active = serializers.BooleanField(required=False)


class DeliveryRateResolveSerializer(serializers.Serializer):
    agency_id = serializers.IntegerField(min_value=1)
    carrier_id = serializers.IntegerField(min_value=1)
    city_id = serializers.IntegerField(min_value=1, required=False)
    city_type = serializers.ChoiceField(choices=CityType.CHOICES, required=False)

    def validate(self, attrs):
        if attrs.get("city_id") is None and not attrs.get("city_type"):
            raise serializers.ValidationError("city_id or city_type is required")
        return attrs
