from __future__ import annotations

import logging

from django.db import IntegrityError
from django.db import transaction
from django.db.models import QuerySet

from edtech_hub.audit.utils import log_action
from edtech_hub.common.exceptions import AlreadyExists
from edtech_hub.common.exceptions import Unauthorized
from edtech_hub.users.api.permissions import is_admin
from edtech_hub.users.api.permissions import is_teacher_or_admin
from edtech_hub.users.models import User

from .models import Classroom
from .models import Enrollment

logger = logging.getLogger(__name__)


def classrooms_for(user: User) -> QuerySet[Classroom]:
    """Classrooms a user teaches (teachers) or is actively enrolled in."""

    if user.role == User.Role.TEACHER:
        return Classroom.objects.filter(teacher=user)
    return Classroom.objects.filter(
        enrollments__student=user,
        enrollments__status=Enrollment.Status.ACTIVE,
    ).distinct()


def active_students(classroom: Classroom) -> QuerySet[User]:
    return User.objects.filter(
        enrollments__classroom=classroom,
        enrollments__status=Enrollment.Status.ACTIVE,
    ).order_by("id")


def can_manage(user: User, classroom: Classroom) -> bool:
    return is_admin(user) or classroom.teacher_id == user.pk


@transaction.atomic
def create_classroom(user: User, **fields) -> Classroom:
    if not is_teacher_or_admin(user):
        msg = "Only teachers can create classrooms"
        raise Unauthorized(msg)
    fields.pop("teacher", None)
    fields["is_active"] = True
    classroom = Classroom.objects.create(teacher=user, **fields)
    log_action("classroom_created", actor=user, target=classroom)
    return classroom


def enroll(classroom: Classroom, student: User) -> Enrollment:
    if Enrollment.objects.filter(classroom=classroom, student=student).exists():
        msg = "Already enrolled in this classroom"
        raise AlreadyExists(msg)
    try:
        with transaction.atomic():
            enrollment = Enrollment.objects.create(
                classroom=classroom,
                student=student,
                status=Enrollment.Status.ACTIVE,
            )
    except IntegrityError as exc:
        msg = "Already enrolled in this classroom"
        raise AlreadyExists(msg) from exc
    logger.info("User %s enrolled in classroom %s", student.pk, classroom.pk)
    return enrollment
