from rest_framework import serializers

from .models import Agency, AgencyType


class AgencySerializer(serializers.ModelSerializer):
    class Meta:
        model = Agency
        fields = [
            "id", "name", "address", "contact", "phone", "email",
            "agency_type", "parent_agency", "forwarder_id", "is_active",
            "created_at", "updated_at",
        ]
        read_only_fields = fields


class AgencyAdminUserSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")


class AgencyCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    address = serializers.CharField(required=False, allow_blank=True, default="")
    contact = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    email = serializers.EmailField(required=False, allow_blank=True, default="")
    agency_type = serializers.ChoiceField(
        choices=[(AgencyType.RESELLER, "Reseller"), (AgencyType.AGENCY, "Agency")],
        default=AgencyType.AGENCY,
    )
    parent_agency_id = serializers.IntegerField(required=False, allow_null=True)
    admin_user = AgencyAdminUserSerializer()


class AgencyUpdateSerializer(serializers.Serializer):
    # type and parent are not patchable
    name = serializers.CharField(max_length=255, required=False)
    address = serializers.CharField(required=False, allow_blank=True)
    contact = serializers.CharField(max_length=255, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=64, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)
