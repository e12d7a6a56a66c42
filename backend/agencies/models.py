from django.db import models


class AgencyType:
    FORWARDER = "FORWARDER"
    RESELLER = "RESELLER"
    AGENCY = "AGENCY"

    CHOICES = [
        (FORWARDER, "Forwarder"),
        (RESELLER, "Reseller"),
        (AGENCY, "Agency"),
    ]

    # Agency types allowed to own child agencies
    PARENT_TYPES = (FORWARDER, RESELLER)


class Agency(models.Model):
    id = models.BigAutoField(primary_key=True)
    name = models.CharField(max_length=255, unique=True)
    address = models.TextField(blank=True, default='')
    contact = models.CharField(max_length=255, blank=True, default='')
    phone = models.CharField(max_length=64, blank=True, default='')
    email = models.EmailField(blank=True, default='')
    agency_type = models.CharField(max_length=16, choices=AgencyType.CHOICES, default=AgencyType.AGENCY)
    parent_agency = models.ForeignKey(
        'agencies.Agency', models.PROTECT, related_name='children', blank=True, null=True
    )
    # Root (FORWARDER) ancestor id, denormalized for scoping
    forwarder_id = models.BigIntegerField(blank=True, null=True, db_index=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'agencies'

    def __str__(self):
        return f"{self.name} ({self.agency_type})"

    @property
    def is_root(self) -> bool:
        return self.parent_agency_id is None

    def save(self, *args, **kwargs):
        if self.parent_agency_id is not None and self.forwarder_id is None:
            parent = Agency.objects.only('id', 'forwarder_id').get(pk=self.parent_agency_id)
            self.forwarder_id = parent.forwarder_id or parent.id
        super().save(*args, **kwargs)
        if self.parent_agency_id is None and self.forwarder_id != self.id:
            self.forwarder_id = self.id
            Agency.objects.filter(pk=self.pk).update(forwarder_id=self.id)
