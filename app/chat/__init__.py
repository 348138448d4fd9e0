"""
Chat app: messages between customers and the dispatcher.

Every customer has exactly one conversation, with the configured dispatcher
identity. Clients poll; there is no socket layer.

Related apps:
    - authentication: identities, roles and profiles
    - orders: order-linked messages and the inbox order column
    - media: attachment upload and URL resolution
    - notifications: push alerts for new messages

Usage:
    from chat.services import MessageService, ConversationService
    from chat.aggregation import ThreadAggregator

    MessageService.send_message(sender="ada@example.com", text="Hello!")
    threads = ThreadAggregator().list_threads()
"""
