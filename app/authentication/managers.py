"""
Custom user manager for email-based authentication.

Emails are the chat identity of a user, so the whole address is lower-cased
and stripped here; every message row stores the same normalized form.
"""

from django.contrib.auth.models import BaseUserManager


def normalize_identity(email):
    """Lower-case and strip an email so it can be compared as an identity."""
    return (email or "").strip().lower()


class UserManager(BaseUserManager):
    """
    Manager for the email-identified User model.

    Usage:
        user = User.objects.create_user(
            email='Customer@Example.com ',
            password='securepassword'
        )
        user.email  # 'customer@example.com'

        admin = User.objects.create_superuser(
            email='dispatch@example.com',
            password='adminpassword'
        )
    """

    def create_user(self, email, password=None, **extra_fields):
        """
        Create and save a user with the given email and password.

        Raises:
            ValueError: If email is empty after normalization
        """
        email = normalize_identity(email)
        if not email:
            raise ValueError("The Email field must be set")

        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)

        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """
        Create and save a superuser. Superusers carry the admin role.

        Raises:
            ValueError: If is_staff or is_superuser is not True
        """
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", "admin")

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)

    def get_by_natural_key(self, username):
        return self.get(**{self.model.USERNAME_FIELD: normalize_identity(username)})
