"""
Django signals for authentication.

- Auto-creating Profile when User is created

Signals are connected in AuthenticationConfig.ready().
"""

import logging

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_profile(sender, instance, created, **kwargs):
    """
    Create an empty Profile for newly created users.

    The profile is filled in later by the user; until then the inbox falls
    back to the email identity as the display name.
    """
    if created:
        from authentication.models import Profile

        Profile.objects.get_or_create(user=instance)
        logger.debug("Profile created for user: %s", instance.email)
