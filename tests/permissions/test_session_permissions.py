from tests.permissions.mixins import ROLE_ADMIN
from tests.permissions.mixins import ROLE_STUDENT
from tests.permissions.mixins import ROLE_TEACHER
from tests.permissions.mixins import ROLE_USER
from tests.permissions.mixins import RoleAPITestCase


class SessionPermissionTests(RoleAPITestCase):
    def _start(self, role, room="own"):
        return self.post(
            "api_v1:livesession-list",
            role=role,
            payload={"classroom": self.classrooms[room].classroom.pk, "title": "Live"},
        )

    def test_only_classroom_teacher_or_admin_starts_sessions(self):
        self.assert_allowed(self._start(ROLE_TEACHER))
        self.assert_allowed(self._start(ROLE_ADMIN, room="other"))
        self.assert_denied(self._start(ROLE_TEACHER, room="other"))
        self.assert_denied(self._start(ROLE_STUDENT))

    def test_ending_someone_elses_session_is_denied(self):
        kwargs = {"pk": self.classrooms["other"].session.pk}
        self.assert_denied(
            self.post("api_v1:livesession-end", role=ROLE_TEACHER, reverse_kwargs=kwargs)
        )
        self.assert_allowed(
            self.post("api_v1:livesession-end", role=ROLE_ADMIN, reverse_kwargs=kwargs)
        )

    def test_attendance_roster_for_classroom_teacher(self):
        own = {"pk": self.classrooms["own"].session.pk}
        other = {"pk": self.classrooms["other"].session.pk}
        self.assert_allowed(
            self.get("api_v1:livesession-attendance", role=ROLE_TEACHER, reverse_kwargs=own)
        )
        self.assert_denied(
            self.get("api_v1:livesession-attendance", role=ROLE_TEACHER, reverse_kwargs=other)
        )
        self.assert_denied(
            self.get("api_v1:livesession-attendance", role=ROLE_USER, reverse_kwargs=own)
        )

    def test_any_signed_in_role_can_join(self):
        kwargs = {"pk": self.classrooms["own"].session.pk}
        for role in (ROLE_STUDENT, ROLE_USER):
            self.assert_allowed(
                self.post("api_v1:livesession-join", role=role, reverse_kwargs=kwargs)
            )
        self.classrooms["own"].session.refresh_from_db()
        assert self.classrooms["own"].session.attendee_count == 2  # noqa: PLR2004
