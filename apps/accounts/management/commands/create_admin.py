from decouple import config
from django.conf import settings
from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model

from apps.accounts.models import Organization, Role, UserStatus


class Command(BaseCommand):
    help = "Create or update an organization admin from ADMIN_EMAIL / ADMIN_PASSWORD."

    def handle(self, *args, **options):
        # 1. Safety Check for Production
        if not settings.DEBUG and not config("ALLOW_CREATE_ADMIN_IN_PROD", default=False, cast=bool):
            self.stderr.write(self.style.ERROR(
                "Production Lock: Set ALLOW_CREATE_ADMIN_IN_PROD=True to run this."
            ))
            return

        email = config("ADMIN_EMAIL", default="")
        password = config("ADMIN_PASSWORD", default="")
        org_name = config("ADMIN_ORGANIZATION", default=settings.DEFAULT_ORGANIZATION_NAME)

        if not email or not password:
            self.stderr.write(self.style.ERROR(
                "Missing ADMIN_EMAIL or ADMIN_PASSWORD env vars."
            ))
            return

        User = get_user_model()
        org, _ = Organization.objects.get_or_create(name=org_name)

        # 2. Get or Create
        user, created = User.objects.get_or_create(
            org=org,
            email=email.strip().lower(),
            defaults={"role": Role.ADMIN},
        )

        # 3. Enforce Permissions
        user.is_staff = True
        user.is_superuser = True
        user.role = Role.ADMIN
        user.status = UserStatus.ACTIVE
        user.set_password(password)
        user.save()

        if created:
            self.stdout.write(self.style.SUCCESS(f"Created admin: {user.email} ({org.name})"))
        else:
            self.stdout.write(self.style.WARNING(f"Updated admin: {user.email} ({org.name})"))
