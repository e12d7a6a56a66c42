from django.contrib import admin

from .models import Issue


@admin.register(Issue)
class IssueAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "type", "priority", "status", "order", "agency", "assigned_to", "created_at")
    list_filter = ("status", "priority", "type")
    search_fields = ("title", "description", "order__id")
    readonly_fields = ("resolved_at", "resolved_by")
