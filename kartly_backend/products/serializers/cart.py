# products/serializers/cart.py

"""
CART LINE SERIALIZER

Transport-layer shape of one cart line: {"id": <product id>, "quantity": <int>}.
Only ids and quantities are accepted; prices always come from the catalog.
"""

from rest_framework import serializers

from products.services.pricing import CartLine


class StrictIntegerField(serializers.IntegerField):
    """
    JSON numbers only: 2 and 2.0 pass, "2", 2.5 and true do not.
    """

    def to_internal_value(self, data):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            self.fail("invalid")
        if isinstance(data, float) and not data.is_integer():
            self.fail("invalid")
        return super().to_internal_value(int(data))


MAX_LINE_QUANTITY = 1000


class CartLineSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64)
    quantity = StrictIntegerField(min_value=1, max_value=MAX_LINE_QUANTITY)


def to_cart_lines(validated_lines) -> list[CartLine]:
    return [CartLine(product_id=line["id"].strip(), quantity=line["quantity"]) for line in validated_lines]
