"""
API views for orders.

URL Structure:
    /api/v1/orders/                 GET (own orders), POST (place order)
    /api/v1/orders/pending/         GET (dispatch queue, admin only)
    /api/v1/orders/{id}/status/     POST (change status, admin only)
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from chat.permissions import IsDispatcherAdmin
from orders.serializers import (
    OrderCreateSerializer,
    OrderSerializer,
    OrderStatusSerializer,
    PendingOrderSerializer,
)
from orders.services import OrderService


class OrderListCreateView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_my_orders",
        summary="List my orders",
        tags=["Orders"],
        responses={200: OrderSerializer(many=True)},
    )
    def get(self, request):
        orders = OrderService.list_for_customer(request.user)
        return Response(OrderSerializer(orders, many=True).data)

    @extend_schema(
        operation_id="create_order",
        summary="Place an order",
        description=(
            "Creates the order, posts a receipt and an automatic reply to the "
            "customer's conversation and alerts the dispatcher."
        ),
        tags=["Orders"],
        request=OrderCreateSerializer,
        responses={
            201: OpenApiResponse(description="Order created"),
            400: OpenApiResponse(description="Missing order fields"),
        },
    )
    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = OrderService.create_order(request.user, serializer.validated_data)
        if not result.success:
            return Response(result.to_response(), status=status.HTTP_400_BAD_REQUEST)

        order = result.data
        return Response(
            {
                "message": "Order created",
                "order_id": order.pk,
                "timestamp": order.created_at,
                "order": OrderSerializer(order).data,
            },
            status=status.HTTP_201_CREATED,
        )


class PendingOrderListView(APIView):
    """Dispatch queue: every pending order, newest first."""

    permission_classes = [IsAuthenticated, IsDispatcherAdmin]

    @extend_schema(
        operation_id="list_pending_orders",
        summary="List pending orders",
        tags=["Orders"],
        responses={200: PendingOrderSerializer(many=True)},
    )
    def get(self, request):
        return Response(PendingOrderSerializer(OrderService.list_pending(), many=True).data)


class OrderStatusView(APIView):
    permission_classes = [IsAuthenticated, IsDispatcherAdmin]

    @extend_schema(
        operation_id="update_order_status",
        summary="Update order status",
        tags=["Orders"],
        request=OrderStatusSerializer,
        responses={
            200: OrderSerializer,
            404: OpenApiResponse(description="Order not found"),
        },
    )
    def post(self, request, pk):
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = OrderService.update_status(request.user, pk, serializer.validated_data["status"])
        return Response(OrderSerializer(order).data)
