"""Create the first owner account of the admin dashboard."""

import typing as t

import structlog
from decouple import config
from django.core.management.base import BaseCommand, CommandError, CommandParser

from accounts.models import AdminAccount

logger = structlog.get_logger(__name__)


class Command(BaseCommand):
    help = "Create an owner account. Values default to OWNER_USERNAME, OWNER_EMAIL and OWNER_PASSWORD."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("--username", default=config("OWNER_USERNAME", default=""))
        parser.add_argument("--email", default=config("OWNER_EMAIL", default=""))
        parser.add_argument("--password", default=config("OWNER_PASSWORD", default=""))

    def handle(self, *args: t.Any, **options: t.Any) -> None:
        """Create the owner unless an account with that username already exists."""
        username, email, password = options["username"], options["email"], options["password"]
        if not (username and email and password):
            raise CommandError("username, email and password are required")
        if AdminAccount.objects.filter(username=username).exists():
            self.stdout.write(self.style.WARNING(f"Account {username} already exists, skipping."))
            return
        account = AdminAccount.objects.create_owner(username=username, email=email, password=password)
        logger.info("owner_account_created", account_id=str(account.id))
        self.stdout.write(self.style.SUCCESS(f"Owner account {username} created."))
