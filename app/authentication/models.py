"""
Authentication models.

- User: Email-identified account carrying a dispatch role
- Profile: Display data (name, avatar storage key, phone), OneToOne with User

Related files:
    - managers.py: Email normalization on creation
    - services.py: ProfileDirectory lookups for the chat inbox
    - signals.py: Auto-create profile on user creation
"""

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from authentication.managers import UserManager
from core.models import BaseModel


class Role(models.TextChoices):
    """Dispatch roles. Only ADMIN may read the inbox or other conversations."""

    USER = "user", "Customer"
    RIDER = "rider", "Rider"
    ADMIN = "admin", "Admin"


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    The stored email is the user's chat identity: lower-cased and stripped
    by UserManager, and used verbatim as Message.sender_identity /
    receiver_identity.

    Usage:
        user = User.objects.create_user(
            email='user@example.com',
            password='securepassword',
        )
        rider = User.objects.create_user(
            email='rider@example.com',
            password='securepassword',
            role=Role.RIDER,
        )
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier and chat identity)",
    )

    role = models.CharField(
        max_length=10,
        choices=Role.choices,
        default=Role.USER,
        db_index=True,
        help_text="Dispatch role; admins manage the shared dispatcher inbox",
    )

    is_verified = models.BooleanField(
        default=False,
        help_text="Whether the user's email has been verified",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email

    @property
    def is_admin_role(self):
        return self.role == Role.ADMIN

    def get_full_name(self):
        """Full name from profile, or email if no profile/name set."""
        try:
            return self.profile.full_name or self.email
        except Profile.DoesNotExist:
            return self.email

    def get_short_name(self):
        """First name from profile, or the email local part."""
        try:
            return self.profile.first_name or self.email.split("@")[0]
        except Profile.DoesNotExist:
            return self.email.split("@")[0]


class Profile(BaseModel):
    """
    Display data for a user.

    Fields:
        user: OneToOne link to User (also serves as primary key)
        first_name / last_name: Display name parts
        avatar_key: Storage key or external URL of the avatar image
        phone: Contact number

    Note:
        Profile is automatically created via signals when a User is created.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        primary_key=True,
        help_text="User this profile belongs to",
    )

    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)

    avatar_key = models.CharField(
        max_length=512,
        blank=True,
        default="",
        help_text="Storage key (or external URL) of the avatar image",
    )

    phone = models.CharField(max_length=32, blank=True, default="")

    class Meta:
        db_table = "authentication_profile"
        verbose_name = "profile"
        verbose_name_plural = "profiles"

    def __str__(self):
        return self.full_name or str(self.user)

    @property
    def full_name(self):
        """Return full name or empty string."""
        return f"{self.first_name} {self.last_name}".strip()
