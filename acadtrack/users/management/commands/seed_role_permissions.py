# acadtrack/users/management/commands/seed_role_permissions.py

from django.core.management.base import BaseCommand
from django.db import transaction
from acadtrack.users.utils.permission_store import seed_default_permissions


class Command(BaseCommand):
    help = "Create missing role permission rows from the default grant matrix"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Also restore existing rows to their default grant",
        )

    def handle(self, *args, **options):
        with transaction.atomic():
            created, restored = seed_default_permissions(reset=options["reset"])

        self.stdout.write(
            self.style.SUCCESS(
                f"Role permissions seeded: {created} created, {restored} reset"
            )
        )
