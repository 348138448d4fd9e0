"""
API views for chat.

URL Structure:
    /api/v1/chat/messages/        GET (fetch conversation), POST (send)
    /api/v1/chat/messages/read/   POST (mark read)
    /api/v1/chat/threads/         GET (dispatcher inbox, admin only)

Design Decisions:
    - Views only translate HTTP to service calls; the requester identity is
      mapped with requester_identity so admins act as the dispatcher
    - Service exceptions (core.exceptions) are rendered by the project
      exception handler, so views do not catch them
"""

from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from chat.aggregation import ThreadAggregator
from chat.permissions import IsDispatcherAdmin, requester_identity
from chat.serializers import (
    MarkReadSerializer,
    MessageCreateSerializer,
    MessageSerializer,
    ThreadSummarySerializer,
)
from chat.services import ConversationService, MessageService


class MessageListCreateView(APIView):
    """
    GET: Latest messages of the requester's conversation, oldest first.
         Admins pass ?email=<customer> to open a customer's conversation.
    POST: Send a message. Customers always write to the dispatcher.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="fetch_conversation",
        summary="Fetch conversation",
        tags=["Chat"],
        parameters=[
            OpenApiParameter(
                name="email",
                type=OpenApiTypes.EMAIL,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Customer whose conversation to open (admin only)",
            ),
        ],
        responses={
            200: MessageSerializer(many=True),
            403: OpenApiResponse(description="Non-admin named another user"),
        },
    )
    def get(self, request):
        messages = ConversationService.fetch_conversation(
            requester_identity(request.user),
            counterpart=request.query_params.get("email"),
        )
        return Response(MessageSerializer(messages, many=True).data)

    @extend_schema(
        operation_id="send_message",
        summary="Send message",
        tags=["Chat"],
        request=MessageCreateSerializer,
        responses={
            201: MessageSerializer,
            400: OpenApiResponse(description="Empty message or missing receiver"),
        },
    )
    def post(self, request):
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        message = MessageService.send_message(
            sender=requester_identity(request.user),
            text=data["text"],
            attachment=data["attachment"],
            receiver=data["receiver"] or None,
            order=data["order"],
        )
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)


class MarkReadView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="mark_messages_read",
        summary="Mark messages read",
        tags=["Chat"],
        request=MarkReadSerializer,
        responses={200: OpenApiResponse(description='{"updated": <count>}')},
    )
    def post(self, request):
        serializer = MarkReadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        updated = MessageService.mark_read(
            requester_identity(request.user),
            direction=serializer.validated_data["direction"],
            counterpart=serializer.validated_data["counterpart"] or None,
        )
        return Response({"updated": updated})


class ThreadListView(APIView):
    """Dispatcher inbox: one row per customer, newest activity first."""

    permission_classes = [IsAuthenticated, IsDispatcherAdmin]

    @extend_schema(
        operation_id="list_threads",
        summary="List inbox threads",
        tags=["Chat"],
        responses={
            200: ThreadSummarySerializer(many=True),
            403: OpenApiResponse(description="Admin privileges required"),
        },
    )
    def get(self, request):
        threads = ThreadAggregator().list_threads()
        return Response(ThreadSummarySerializer(threads, many=True).data)
