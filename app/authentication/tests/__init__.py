"""
Tests for authentication app.

- test_managers.py: identity normalization on user creation
- test_services.py: ProfileDirectory and ProfileService
- test_views.py: login claims and /me endpoint
"""
