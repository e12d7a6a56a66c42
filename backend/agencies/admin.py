from django.contrib import admin

from .models import Agency


@admin.register(Agency)
class AgencyAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "agency_type", "parent_agency", "forwarder_id", "is_active")
    list_filter = ("agency_type", "is_active")
    search_fields = ("name", "email")
