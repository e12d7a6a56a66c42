from django.db import models


class ServiceType:
    AIR = "AIR"
    MARITIME = "MARITIME"

    CHOICES = [
        (AIR, "Air"),
        (MARITIME, "Maritime"),
    ]


class ProductUnit:
    PER_LB = "PER_LB"
    FIXED = "FIXED"

    CHOICES = [
        (PER_LB, "Per pound"),
        (FIXED, "Fixed"),
    ]


class CityType:
    SPECIAL = "SPECIAL"
    CAPITAL = "CAPITAL"
    CITY = "CITY"
    RURAL = "RURAL"

    CHOICES = [
        (SPECIAL, "Special"),
        (CAPITAL, "Capital"),
        (CITY, "City"),
        (RURAL, "Rural"),
    ]


class Carrier(models.Model):
    id = models.BigAutoField(primary_key=True)
    name = models.CharField(max_length=255, unique=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'carriers'

    def __str__(self):
        return self.name


class Service(models.Model):
    id = models.BigAutoField(primary_key=True)
    carrier = models.ForeignKey('core.Carrier', models.PROTECT, related_name='services', blank=True, null=True)
    forwarder_id = models.BigIntegerField(blank=True, null=True)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    service_type = models.CharField(max_length=16, choices=ServiceType.CHOICES, default=ServiceType.AIR)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'services'

    def __str__(self):
        return f"{self.name} ({self.service_type})"


class Product(models.Model):
    id = models.BigAutoField(primary_key=True)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    unit = models.CharField(max_length=16, choices=ProductUnit.CHOICES, default=ProductUnit.PER_LB)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'products'

    def __str__(self):
        return self.name


class Province(models.Model):
    id = models.BigAutoField(primary_key=True)
    name = models.CharField(max_length=255, unique=True)

    class Meta:
        db_table = 'provinces'

    def __str__(self):
        return self.name


class City(models.Model):
    id = models.BigAutoField(primary_key=True)
    province = models.ForeignKey('core.Province', models.PROTECT, related_name='cities')
    name = models.CharField(max_length=255)
    city_type = models.CharField(max_length=16, choices=CityType.CHOICES, default=CityType.CITY)

    class Meta:
        db_table = 'cities'
        unique_together = (('province', 'name'),)

    def __str__(self):
        return f"{self.name} ({self.city_type})"
