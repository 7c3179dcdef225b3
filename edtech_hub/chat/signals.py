from django.db.models.signals import post_save
from django.db.transaction import on_commit
from django.dispatch import receiver

from edtech_hub.realtime.events.chat import publish_message_created

from .models import Message


@receiver(post_save, sender=Message)
def send_message_ws(sender, instance, created, **kwargs):
    if created:
        on_commit(lambda: publish_message_created(instance))
