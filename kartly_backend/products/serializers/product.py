# products/serializers/product.py

"""
PRODUCT SERIALIZER

Canonical catalog serializer for both the storefront (read) and the
back-office (admin write).
"""

from rest_framework import serializers

from products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "category",
            "short_description",
            "full_description",
            "unit_price",
            "image_url",
            "in_stock",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def validate_unit_price(self, value):
        if value is None or value <= 0:
            raise serializers.ValidationError("Unit price must be greater than zero")
        return value

    def validate_id(self, value):
        # Product ids are referenced by historical orders; they never change.
        if self.instance is not None and value != self.instance.id:
            raise serializers.ValidationError("Product id cannot be changed")
        return value
