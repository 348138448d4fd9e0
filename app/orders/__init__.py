"""
Orders app: customer delivery requests.

Placing an order also opens (or continues) the customer's conversation with
the dispatcher: a receipt message and an automatic reply are written to the
chat log, linked to the order.

Usage:
    from orders.services import OrderService, OrderDirectory
"""
