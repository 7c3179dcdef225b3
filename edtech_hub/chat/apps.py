from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class ChatConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "edtech_hub.chat"
    verbose_name = _("Chat")

    def ready(self):
        import edtech_hub.chat.signals  # noqa: F401, PLC0415
