from django.contrib import admin

from .models import DeliveryRate, PricingAgreement, ShippingRate


class ShippingRateInline(admin.TabularInline):
    model = ShippingRate
    extra = 0
    fields = ("agency", "product", "service", "price_in_cents", "scope", "is_active")
    readonly_fields = ("agency", "product", "service")


@admin.register(PricingAgreement)
class PricingAgreementAdmin(admin.ModelAdmin):
    list_display = ("id", "seller_agency", "buyer_agency", "product", "service", "price_in_cents", "is_active", "effective_from")
    list_filter = ("is_active", "service")
    search_fields = ("seller_agency__name", "buyer_agency__name", "product__name")
    inlines = [ShippingRateInline]


@admin.register(ShippingRate)
class ShippingRateAdmin(admin.ModelAdmin):
    list_display = ("id", "agency", "product", "service", "price_in_cents", "scope", "is_active")
    list_filter = ("scope", "is_active", "service")
    search_fields = ("agency__name", "product__name")


@admin.register(DeliveryRate)
class DeliveryRateAdmin(admin.ModelAdmin):
    list_display = ("id", "agency", "forwarder_id", "carrier", "city", "city_type", "rate_in_cents", "cost_in_cents", "is_base_rate", "is_active")
    list_filter = ("is_base_rate", "is_active", "carrier", "city_type")
    search_fields = ("agency__name", "city__name")
