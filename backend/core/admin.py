from django.contrib import admin

from .models import Carrier, City, Product, Province, Service


@admin.register(Carrier)
class CarrierAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name",)


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "carrier", "service_type", "forwarder_id", "is_active")
    list_filter = ("service_type", "is_active")
    search_fields = ("name",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "unit", "is_active")
    list_filter = ("unit", "is_active")
    search_fields = ("name",)


@admin.register(Province)
class ProvinceAdmin(admin.ModelAdmin):
    list_display = ("id", "name")
    search_fields = ("name",)


@admin.register(City)
class CityAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "province", "city_type")
    list_filter = ("city_type", "province")
    search_fields = ("name",)
