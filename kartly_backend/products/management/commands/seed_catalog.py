from decimal import Decimal

from django.core.management.base import BaseCommand

from products.models import Product

CATALOG = [
    {
        "id": "cozycup-premium",
        "name": "CozyCup Premium",
        "category": "Drinkware",
        "short_description": "Self-heating smart mug that keeps drinks at the perfect temperature.",
        "unit_price": Decimal("2499.00"),
    },
]


class Command(BaseCommand):
    help = "Seed the storefront catalog (idempotent)"

    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding catalog..."))

        created_count = 0
        for row in CATALOG:
            data = dict(row)
            _, created = Product.objects.update_or_create(id=data.pop("id"), defaults=data)
            created_count += int(created)

        self.stdout.write(
            self.style.SUCCESS(
                f"Catalog seeded: {created_count} created, {len(CATALOG) - created_count} updated."
            )
        )
