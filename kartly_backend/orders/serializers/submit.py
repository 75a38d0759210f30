# orders/serializers/submit.py

"""
ORDER SUBMISSION INPUT

Field declaration order IS the validation order: when several fields are
invalid, first_validation_error() reports the earliest one only.
"""

from rest_framework import serializers

from products.serializers.cart import CartLineSerializer, StrictIntegerField

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
PHONE_PATTERN = r"^[0-9]{10}$"

FIELD_ERROR_MESSAGES = {
    "customer_name": "Invalid customer name",
    "email": "Invalid email address",
    "phone": "Invalid phone number. Must be 10 digits.",
    "address": "Invalid address. Must be between 10 and 500 characters.",
    "points_to_redeem": "Invalid points to redeem",
    "transaction_id": "Invalid payment details",
    "screenshot_path": "Invalid payment details",
}

INVALID_PRODUCTS_LIST = "Invalid products list"
INVALID_PRODUCT_DATA = "Invalid product data"
INVALID_REQUEST_BODY = "Invalid request body"


class SubmitOrderSerializer(serializers.Serializer):
    customer_name = serializers.CharField(min_length=2, max_length=100)
    email = serializers.RegexField(EMAIL_PATTERN, max_length=255)
    phone = serializers.RegexField(PHONE_PATTERN)
    address = serializers.CharField(min_length=10, max_length=500)
    products = CartLineSerializer(many=True, allow_empty=False)
    points_to_redeem = StrictIntegerField(min_value=0, required=False, default=0)

    # Payment evidence (optional, stored as given)
    transaction_id = serializers.CharField(
        max_length=100, required=False, allow_null=True, allow_blank=True, default=None
    )
    screenshot_path = serializers.CharField(
        max_length=500, required=False, allow_null=True, allow_blank=True, default=None
    )

    def validate_email(self, value):
        return value.lower()


def _is_per_line_error(detail) -> bool:
    # ListSerializer reports item failures as one dict per cart line.
    return isinstance(detail, list) and any(isinstance(item, dict) for item in detail)


def first_validation_error(serializer: SubmitOrderSerializer) -> str:
    """Map serializer.errors to the single message of the first failing field."""
    errors = serializer.errors

    for name in serializer.fields:
        if name not in errors:
            continue
        if name == "products":
            if _is_per_line_error(errors[name]):
                return INVALID_PRODUCT_DATA
            return INVALID_PRODUCTS_LIST
        return FIELD_ERROR_MESSAGES[name]

    return INVALID_REQUEST_BODY
