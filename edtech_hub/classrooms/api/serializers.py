from rest_framework import serializers

from edtech_hub.classrooms.models import Classroom
from edtech_hub.classrooms.models import Enrollment
from edtech_hub.classrooms.services import active_students
from edtech_hub.users.api.serializers import UserSummarySerializer


class ClassroomSerializer(serializers.ModelSerializer):
    class Meta:
        model = Classroom
        fields = [
            "id",
            "name",
            "description",
            "teacher",
            "subject",
            "grade",
            "is_active",
            "max_students",
            "meeting_url",
            "scheduled_time",
            "duration_minutes",
            "language",
            "allow_translation",
            "created_at",
        ]
        read_only_fields = ["id", "teacher", "is_active", "created_at"]


class ClassroomDetailSerializer(ClassroomSerializer):
    teacher = UserSummarySerializer(read_only=True)
    students = serializers.SerializerMethodField()
    enrollment_count = serializers.SerializerMethodField()

    class Meta(ClassroomSerializer.Meta):
        fields = [*ClassroomSerializer.Meta.fields, "students", "enrollment_count"]

    def get_students(self, obj) -> list[dict]:
        return UserSummarySerializer(active_students(obj), many=True).data

    def get_enrollment_count(self, obj) -> int:
        return active_students(obj).count()


class EnrollmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Enrollment
        fields = ["id", "classroom", "student", "enrolled_at", "status"]
        read_only_fields = fields
