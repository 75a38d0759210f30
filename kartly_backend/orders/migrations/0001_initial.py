import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "order_no",
                    models.CharField(
                        blank=True,
                        help_text="System-generated public order number",
                        max_length=64,
                        unique=True,
                    ),
                ),
                ("customer_name", models.CharField(max_length=100)),
                ("email", models.EmailField(max_length=255)),
                ("phone", models.CharField(max_length=10)),
                ("address", models.CharField(max_length=500)),
                ("products", models.JSONField(default=list)),
                ("subtotal_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("discount_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("total_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("points_redeemed", models.PositiveIntegerField(default=0)),
                ("points_earned", models.PositiveIntegerField(default=0)),
                ("payment_screenshot_url", models.CharField(blank=True, max_length=500, null=True)),
                ("transaction_id", models.CharField(blank=True, max_length=100, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Pending Verification", "Pending Verification"),
                            ("Verified", "Verified"),
                            ("Shipped", "Shipped"),
                            ("Completed", "Completed"),
                            ("Rejected", "Rejected"),
                        ],
                        default="Pending Verification",
                        max_length=32,
                    ),
                ),
                ("admin_notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "created_at"], name="order_user_created_idx"),
                    models.Index(fields=["status"], name="order_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(total_amount__gte=0),
                        name="order_total_non_negative",
                    ),
                ],
            },
        ),
    ]
