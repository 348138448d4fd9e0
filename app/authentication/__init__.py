"""
Authentication application.

Email-identified users with a dispatch role (user, rider, admin), their
display profile, JWT login, and the profile directory the chat inbox uses
to label threads.

Usage:
    from authentication.models import User, Profile
    from authentication.services import ProfileDirectory
"""
