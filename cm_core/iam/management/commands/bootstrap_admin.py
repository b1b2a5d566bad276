# cm_core/iam/management/commands/bootstrap_admin.py

from django.core.management.base import BaseCommand

from cm_core.iam.models import StaffProfile, StaffRole
from cm_core.iam.services import UserService


class Command(BaseCommand):
    help = "Create the first admin staff account (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--email", required=True)
        parser.add_argument("--password", required=True)
        parser.add_argument("--full-name", default="Administrator")

    def handle(self, *args, **options):
        email = options["email"]

        if StaffProfile.objects.filter(user__username=email).exists():
            self.stdout.write(self.style.WARNING(f"Staff user {email} already exists."))
            return

        profile = UserService.create_user(
            email=email,
            password=options["password"],
            full_name=options["full_name"],
            role=StaffRole.ADMIN,
        )
        self.stdout.write(self.style.SUCCESS(f"Admin created. id={profile.user_id}"))
