from rest_framework import serializers

from .models import Parcel, ParcelStatus


class ParcelSerializer(serializers.ModelSerializer):
    class Meta:
        model = Parcel
        fields = [
            "id", "hbl", "order", "description", "weight", "agency", "service",
            "forwarder_id", "status", "dispatch_id", "container_id", "container_name",
            "flight_id", "created_at", "updated_at",
        ]


class ParcelStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ParcelStatus.PARCEL_CHOICES)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
