"""Seed the default inventory workflow rules of each business."""
from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from stores.models import Business
from workflows.defaults import seed_default_rules


class Command(BaseCommand):
    help = "Create the default workflow rules (auto_reorder, stock_alert, ...) for businesses."

    def add_arguments(self, parser):
        parser.add_argument(
            "--business",
            type=str,
            default="",
            help="Business code to seed (default: all active businesses).",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        code = (options.get("business") or "").strip()
        businesses = Business.objects.filter(is_active=True)
        if code:
            businesses = businesses.filter(code=code)
            if not businesses.exists():
                raise CommandError(f"Entreprise introuvable: {code}")

        total = 0
        for business in businesses:
            created = seed_default_rules(business)
            total += created
            self.stdout.write(f"{business.code}: {created} rule(s) created")

        self.stdout.write(self.style.SUCCESS(f"Workflow seeding complete ({total} rule(s) created)."))
