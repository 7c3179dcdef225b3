import pytest

from edtech_hub.users.models import DEFAULT_DISPLAY_NAME
from edtech_hub.users.models import User


@pytest.mark.django_db
def test_name_filled_from_first_and_last(django_user_model):
    user = django_user_model.objects.create_user(
        username="ada", email="ada@example.com", first_name="Ada", last_name="Lovelace"
    )
    assert user.name == "Ada Lovelace"


@pytest.mark.django_db
def test_display_name_fallback(django_user_model):
    user = django_user_model.objects.create_user(username="anon", email="anon@example.com")
    assert user.display_name == DEFAULT_DISPLAY_NAME


@pytest.mark.django_db
def test_default_role_is_user(django_user_model):
    user = django_user_model.objects.create_user(username="r", email="r@example.com")
    assert user.role == User.Role.USER
    assert not user.is_teacher
