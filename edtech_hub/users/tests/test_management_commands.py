from django.core.management import call_command

from edtech_hub.classrooms.models import Classroom
from edtech_hub.classrooms.models import Enrollment
from edtech_hub.users.models import User


def test_seed_demo_data_is_idempotent(db):
    call_command("seed_demo_data")
    call_command("seed_demo_data")

    teacher = User.objects.get(email="sarah.johnson@educollab.com")
    assert teacher.role == User.Role.TEACHER
    assert User.objects.filter(role=User.Role.STUDENT).count() == 2  # noqa: PLR2004
    assert Classroom.objects.filter(teacher=teacher).count() == 3  # noqa: PLR2004

    alex = User.objects.get(email="alex.chen@student.com")
    assert Enrollment.objects.filter(student=alex).count() == 2  # noqa: PLR2004
    assert alex.check_password("demo-pass-123")
