from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from edtech_hub.classrooms.models import Classroom
from edtech_hub.classrooms.models import Enrollment

DEMO_PASSWORD = "demo-pass-123"  # noqa: S105 - local demo data only

DEMO_USERS = {
    "teacher": {
        "name": "Dr. Sarah Johnson",
        "email": "sarah.johnson@educollab.com",
        "role": "teacher",
        "institution": "Global University",
        "subject": "Mathematics",
        "preferred_language": "English",
        "timezone": "UTC-5",
    },
    "alex": {
        "name": "Alex Chen",
        "email": "alex.chen@student.com",
        "role": "student",
        "institution": "Global University",
        "grade": "Grade 10",
        "preferred_language": "English",
        "timezone": "UTC-8",
    },
    "maria": {
        "name": "Maria Rodriguez",
        "email": "maria.rodriguez@student.com",
        "role": "student",
        "institution": "Global University",
        "grade": "Grade 10",
        "preferred_language": "Spanish",
        "timezone": "UTC-6",
    },
}

DEMO_CLASSROOMS = [
    {
        "name": "Advanced Algebra",
        "description": "Learn advanced algebraic concepts with real-world applications",
        "subject": "Mathematics",
        "grade": "Grade 10-12",
        "max_students": 30,
        "language": "English",
        "enroll": ["alex", "maria"],
    },
    {
        "name": "Calculus Fundamentals",
        "description": "Introduction to differential and integral calculus",
        "subject": "Mathematics",
        "grade": "Grade 11-12",
        "max_students": 25,
        "language": "English",
        "enroll": ["alex"],
    },
    {
        "name": "Spanish Literature",
        "description": "Explore classic and contemporary Spanish literature",
        "subject": "Literature",
        "grade": "Grade 9-12",
        "max_students": 20,
        "language": "Spanish",
        "enroll": ["maria"],
    },
]


class Command(BaseCommand):
    help = "Create demo teacher, students, classrooms and enrollments (idempotent)."

    @transaction.atomic
    def handle(self, *args, **options):
        user_model = get_user_model()
        users = {}
        for key, fields in DEMO_USERS.items():
            fields = dict(fields)
            email = fields.pop("email")
            user, created = user_model.objects.get_or_create(
                email=email, defaults={"username": email.split("@")[0], **fields}
            )
            if created:
                user.set_password(DEMO_PASSWORD)
                user.save(update_fields=["password"])
            users[key] = user

        for entry in DEMO_CLASSROOMS:
            entry = dict(entry)
            enroll = entry.pop("enroll")
            classroom, _ = Classroom.objects.get_or_create(
                name=entry.pop("name"),
                teacher=users["teacher"],
                defaults={**entry, "allow_translation": True, "is_active": True},
            )
            for key in enroll:
                Enrollment.objects.get_or_create(classroom=classroom, student=users[key])

        self.stdout.write(
            self.style.SUCCESS(
                f"Seeded {len(users)} users and {len(DEMO_CLASSROOMS)} classrooms."
            )
        )
