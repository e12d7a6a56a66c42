from rest_framework import serializers

from .models import Issue, IssuePriority, IssueStatus, IssueType


class IssueSerializer(serializers.ModelSerializer):
    order_id = serializers.IntegerField(read_only=True)
    parcel_id = serializers.IntegerField(read_only=True, allow_null=True)
    agency_id = serializers.IntegerField(read_only=True)
    created_by_id = serializers.IntegerField(read_only=True)
    assigned_to_id = serializers.IntegerField(read_only=True, allow_null=True)
    resolved_by_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Issue
        fields = [
            "id", "title", "description", "type", "priority", "status",
            "order_id", "parcel_id", "agency_id", "created_by_id", "assigned_to_id",
            "resolution_notes", "resolved_at", "resolved_by_id", "created_at", "updated_at",
        ]


class IssueCreateSerializer(serializers.Serializer):
    order_id = serializers.IntegerField(required=False, allow_null=True)
    parcel_id = serializers.IntegerField(required=False, allow_null=True)
    title = serializers.CharField(required=False, allow_blank=True, default="")
    description = serializers.CharField(required=False, allow_blank=True, default="")
    type = serializers.ChoiceField(choices=IssueType.CHOICES, required=False)
    priority = serializers.ChoiceField(choices=IssuePriority.CHOICES, required=False)
    assigned_to_id = serializers.IntegerField(required=False, allow_null=True)


class IssueUpdateSerializer(serializers.Serializer):
    title = serializers.CharField(required=False)
    description = serializers.CharField(required=False)
    type = serializers.ChoiceField(choices=IssueType.CHOICES, required=False)
    priority = serializers.ChoiceField(choices=IssuePriority.CHOICES, required=False)
    status = serializers.ChoiceField(choices=IssueStatus.CHOICES, required=False)
    assigned_to_id = serializers.IntegerField(required=False, allow_null=True)
    resolution_notes = serializers.CharField(required=False, allow_blank=True)


class IssueResolveSerializer(serializers.Serializer):
    resolution_notes = serializers.CharField(required=False, allow_blank=True, default="")
