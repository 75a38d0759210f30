# loyalty/urls.py

"""
LOYALTY URLS

Mounted at /api/loyalty/
"""

from django.urls import path

from loyalty.views import PointsSummaryView, PointsTransactionListView, RedemptionPreviewView

app_name = "loyalty"

urlpatterns = [
    path("points/", PointsSummaryView.as_view(), name="points-summary"),
    path("transactions/", PointsTransactionListView.as_view(), name="points-transactions"),
    path("redemption/preview/", RedemptionPreviewView.as_view(), name="redemption-preview"),
]
