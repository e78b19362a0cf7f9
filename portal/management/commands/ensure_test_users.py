from django.core.management.base import BaseCommand
from django.contrib.auth.hashers import make_password

from portal.models import User
from portal.services.doctors import get_or_create_profile

TEST_SET = [
    ("admin1", "admin"),
    ("doctor1", "doctor"),
    ("patient1", "patient"),
]

PASSWORD = "Test@12345"


class Command(BaseCommand):
    help = f"Ensure test users exist with password={PASSWORD} (idempotent)."

    def handle(self, *args, **opts):
        for username, role in TEST_SET:
            u, created = User.objects.get_or_create(
                username=username,
                defaults={
                    "role": role,
                    "email": f"{username}@example.com",
                    "password": make_password(PASSWORD),
                    "is_active": True,
                },
            )
            if not created:
                # reset password, active flag and role
                u.password = make_password(PASSWORD)
                u.role = role
                u.is_active = True
                u.save(update_fields=["password", "role", "is_active"])
            if role == "doctor":
                get_or_create_profile(u)
            self.stdout.write(self.style.SUCCESS(f"ok: {username} ({role})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
