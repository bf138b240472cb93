from decimal import Decimal

from django.core.management.base import BaseCommand

from orders.models import Complaint


class Command(BaseCommand):
    help = "Seed the standard complaint presets with default prices"

    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding complaint presets..."))

        # -------------------------------
        # PRESETS
        # -------------------------------
        presets = [
            ("Deep Cleaning", Decimal("499.00")),
            ("Sole Replacement", Decimal("1299.00")),
            ("Heel Repair", Decimal("399.00")),
            ("Stitching", Decimal("299.00")),
            ("Color Restoration", Decimal("899.00")),
            ("Sole Whitening", Decimal("349.00")),
        ]

        created_count = 0
        for description, price in presets:
            _, created = Complaint.objects.get_or_create(
                description=description,
                defaults={"default_price": price},
            )
            created_count += int(created)

        self.stdout.write(
            self.style.SUCCESS(
                f"Complaint presets ready ({created_count} new, {len(presets)} total)"
            )
        )
