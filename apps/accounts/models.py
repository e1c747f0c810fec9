import uuid
from django.db import models
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.utils import timezone as dj_timezone

from apps.utils.models import TimestampedModel
from .managers import UserManager


class Role(models.TextChoices):
    ADMIN = "ADMIN", "Admin"
    EMPLOYEE = "EMPLOYEE", "Employee"


class UserStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    DISABLED = "DISABLED", "Disabled"


class Plan(models.TextChoices):
    FREE = "Free", "Free"
    PAID = "Paid", "Paid"
    ENTERPRISE = "Enterprise", "Enterprise"


class Organization(TimestampedModel):
    """
    Tenant. Every other row in the system hangs off one of these.
    """
    name = models.CharField(max_length=255, unique=True)
    plan = models.CharField(max_length=20, choices=Plan.choices, default=Plan.FREE)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class User(AbstractBaseUser, PermissionsMixin):
    """
    Core identity model. Doubles as the employee record of an organization.
    Email is the login identifier and is unique within an org.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    org = models.ForeignKey(
        Organization, on_delete=models.CASCADE, related_name="users", null=True, blank=True
    )
    email = models.EmailField(db_index=True)
    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    department = models.CharField(max_length=120, blank=True)
    location = models.ForeignKey(
        "catalog.Location", on_delete=models.SET_NULL, null=True, blank=True, related_name="employees"
    )

    role = models.CharField(max_length=20, choices=Role.choices, default=Role.EMPLOYEE)
    status = models.CharField(max_length=20, choices=UserStatus.choices, default=UserStatus.ACTIVE)
    timezone = models.CharField(max_length=64, default="UTC")

    is_staff = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    date_joined = models.DateTimeField(default=dj_timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"
        ordering = ["-date_joined"]
        constraints = [
            models.UniqueConstraint(fields=["org", "email"], name="unique_user_email_per_org"),
        ]

    def __str__(self):
        return self.email

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_admin(self):
        return self.role == Role.ADMIN

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        # DISABLED users cannot authenticate
        self.is_active = self.status == UserStatus.ACTIVE
        super().save(*args, **kwargs)
