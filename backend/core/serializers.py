from rest_framework import serializers

from accounts.models import CustomUser

from .models import Carrier


class CarrierSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=255)

    class Meta:
        model = Carrier
        fields = ["id", "name", "is_active", "created_at"]
        read_only_fields = ["id", "created_at"]


class CarrierUserCreateSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    first_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    role = serializers.ChoiceField(choices=CustomUser.ROLE_CHOICES)
