from django.conf import settings
from django.db import models


class IssueType:
    COMPLAINT = "COMPLAINT"
    DAMAGE = "DAMAGE"
    LOSS = "LOSS"
    DELAY = "DELAY"
    OTHER = "OTHER"

    CHOICES = [
        (COMPLAINT, "Complaint"),
        (DAMAGE, "Damage"),
        (LOSS, "Loss"),
        (DELAY, "Delay"),
        (OTHER, "Other"),
    ]


class IssuePriority:
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    CHOICES = [
        (LOW, "Low"),
        (MEDIUM, "Medium"),
        (HIGH, "High"),
        (URGENT, "Urgent"),
    ]


class IssueStatus:
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"

    CHOICES = [
        (OPEN, "Open"),
        (IN_PROGRESS, "In progress"),
        (RESOLVED, "Resolved"),
        (CLOSED, "Closed"),
    ]


class Issue(models.Model):
    id = models.BigAutoField(primary_key=True)
    title = models.CharField(max_length=255)
    description = models.TextField()
    type = models.CharField(max_length=16, choices=IssueType.CHOICES, default=IssueType.COMPLAINT)
    priority = models.CharField(max_length=16, choices=IssuePriority.CHOICES, default=IssuePriority.MEDIUM)
    status = models.CharField(max_length=16, choices=IssueStatus.CHOICES, default=IssueStatus.OPEN)
    order = models.ForeignKey('orders.Order', models.SET_NULL, related_name='issues', blank=True, null=True)
    parcel = models.ForeignKey('orders.Parcel', models.SET_NULL, related_name='issues', blank=True, null=True)
    agency = models.ForeignKey('agencies.Agency', models.PROTECT, related_name='issues')
    created_by = models.ForeignKey(settings.AUTH_USER_MODEL, models.PROTECT, related_name='issues_created')
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL, models.SET_NULL, related_name='issues_assigned', blank=True, null=True
    )
    resolution_notes = models.TextField(blank=True, default='')
    resolved_at = models.DateTimeField(blank=True, null=True)
    resolved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, models.SET_NULL, related_name='issues_resolved', blank=True, null=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'issues'

    def __str__(self):
        return f"#{self.id} {self.title} ({self.status})"
