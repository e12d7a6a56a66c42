from django.contrib import admin

from .models import Order, Parcel, ParcelEvent


class ParcelInline(admin.TabularInline):
    model = Parcel
    extra = 0
    fields = ("hbl", "status", "dispatch_id", "container_id", "weight")
    readonly_fields = ("status",)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "agency", "status", "status_details", "created_by", "created_at")
    list_filter = ("status",)
    search_fields = ("parcels__hbl",)
    date_hierarchy = "created_at"
    readonly_fields = ("status", "status_details")
    inlines = [ParcelInline]


@admin.register(Parcel)
class ParcelAdmin(admin.ModelAdmin):
    list_display = ("hbl", "order", "agency", "status", "dispatch_id", "container_id", "flight_id")
    list_filter = ("status",)
    search_fields = ("hbl", "description")


@admin.register(ParcelEvent)
class ParcelEventAdmin(admin.ModelAdmin):
    list_display = ("parcel", "status", "user", "created_at")
    list_filter = ("status",)
    search_fields = ("parcel__hbl",)

    def has_change_permission(self, request, obj=None):
        return False
