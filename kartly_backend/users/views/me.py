from drf_spectacular.utils import extend_schema
from rest_framework import serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from loyalty.serializers import PointsSummarySerializer
from loyalty.services.ledger import get_or_create_balance

# ---------------------------
# SERIALIZER
# ---------------------------


class MeSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    email = serializers.EmailField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
    role = serializers.CharField()
    points = PointsSummarySerializer()


# ---------------------------
# VIEW
# ---------------------------


class MeView(APIView):
    """Profile of the caller plus their loyalty summary (balance created lazily)."""

    permission_classes = [IsAuthenticated]
    serializer_class = MeSerializer

    @extend_schema(
        responses={200: MeSerializer},
        description="Get current authenticated user profile and points summary",
    )
    def get(self, request):
        user = request.user
        balance = get_or_create_balance(user=user)

        return Response(
            {
                "id": user.id,
                "email": user.email,
                "first_name": user.first_name,
                "last_name": user.last_name,
                "role": user.role,
                "points": PointsSummarySerializer(balance).data,
            }
        )
