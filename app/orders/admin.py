"""Django admin configuration for orders."""

from django.contrib import admin

from orders.models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ["id", "customer", "description", "receiver_name", "status", "created_at"]
    list_filter = ["status"]
    search_fields = ["customer__email", "description", "receiver_name", "receiver_phone"]
    raw_id_fields = ["customer"]
    readonly_fields = ["created_at", "updated_at"]
