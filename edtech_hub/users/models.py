from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import CharField
from django.db.models import EmailField
from django.utils.translation import gettext_lazy as _

DEFAULT_DISPLAY_NAME = "User"


class User(AbstractUser):
    """
    Default custom user model for the EdTech hub.

    ``role`` drives every authorization decision in the API; Django groups
    are not used.
    """

    class Role(models.TextChoices):
        ADMIN = "admin", _("Admin")
        USER = "user", _("User")
        MEMBER = "member", _("Member")
        TEACHER = "teacher", _("Teacher")
        STUDENT = "student", _("Student")

    # First and last name do not cover name patterns around the globe
    name = CharField(_("Full Name"), blank=True, max_length=255)
    email = EmailField(_("email address"), unique=True)
    role = CharField(
        _("Role"), max_length=16, choices=Role.choices, default=Role.USER
    )
    image = models.URLField(blank=True, max_length=500)

    # Learning profile
    institution = CharField(max_length=255, blank=True)
    grade = CharField(max_length=100, blank=True)
    subject = CharField(max_length=150, blank=True)
    preferred_language = CharField(max_length=50, blank=True)
    timezone = CharField(max_length=50, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        # Fill the display name from first/last name when it was not given
        if not self.name:
            self.name = f"{self.first_name} {self.last_name}".strip()
        super().save(*args, **kwargs)

    @property
    def display_name(self) -> str:
        return self.name or DEFAULT_DISPLAY_NAME

    @property
    def is_admin_role(self) -> bool:
        return self.role == self.Role.ADMIN

    @property
    def is_teacher(self) -> bool:
        return self.role == self.Role.TEACHER
