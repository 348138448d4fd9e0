"""
URL configuration for orders API.

All URLs are prefixed with /api/v1/orders/ in the main URL configuration.
"""

from django.urls import path

from orders.views import OrderListCreateView, OrderStatusView, PendingOrderListView

app_name = "orders"

urlpatterns = [
    path("", OrderListCreateView.as_view(), name="orders"),
    path("pending/", PendingOrderListView.as_view(), name="orders-pending"),
    path("<int:pk>/status/", OrderStatusView.as_view(), name="order-status"),
]
