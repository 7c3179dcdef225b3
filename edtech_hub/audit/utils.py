from __future__ import annotations

from django.contrib.auth import get_user_model
from django.db import models

from .models import AuditLog


def log_action(
    action: str,
    *,
    actor: object | None = None,
    target: models.Model | None = None,
    message: str = "",
) -> AuditLog:
    user_model = get_user_model()
    actor_user = actor if isinstance(actor, user_model) else None
    target_type = ""
    target_id = None
    if target is not None:
        target_type = target._meta.label_lower
        target_id = target.pk
    return AuditLog.objects.create(
        action=action,
        actor=actor_user,
        message=message,
        target_type=target_type,
        target_id=target_id,
    )
