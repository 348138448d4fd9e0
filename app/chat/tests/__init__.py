"""
Tests for the chat app.

- test_state_machine.py: status ordering and bulk transitions
- test_presence.py: the trailing activity window
- test_services.py: read sync, send, mark read, fetch
- test_aggregation.py: dispatcher inbox
- test_views.py: REST endpoints

Usage:
    pytest app/chat/tests/
"""
