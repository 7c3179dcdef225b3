from django.conf import settings
from rest_framework.routers import DefaultRouter
from rest_framework.routers import SimpleRouter

from edtech_hub.chat.api.views import MessageViewSet
from edtech_hub.classrooms.api.views import ClassroomViewSet
from edtech_hub.livesessions.api.views import LiveSessionViewSet
from edtech_hub.meetings.api.views import GoogleIntegrationViewSet
from edtech_hub.notes.api.views import AIViewSet
from edtech_hub.notes.api.views import NoteViewSet
from edtech_hub.notifications.api.views import NotificationViewSet
from edtech_hub.presence.api.views import PresenceViewSet
from edtech_hub.reports.api.views import PerformanceReportViewSet
from edtech_hub.users.api.views import UserViewSet
from edtech_hub.videos.api.views import SessionVideoViewSet

router = DefaultRouter() if settings.DEBUG else SimpleRouter()

router.register("users", UserViewSet)
router.register("classrooms", ClassroomViewSet)
router.register("sessions", LiveSessionViewSet)
router.register("presence", PresenceViewSet, basename="presence")
router.register("messages", MessageViewSet, basename="messages")
router.register("notes", NoteViewSet, basename="notes")
router.register("ai", AIViewSet, basename="ai")
router.register("reports", PerformanceReportViewSet, basename="reports")
router.register("videos", SessionVideoViewSet)
router.register("notifications", NotificationViewSet, basename="notifications")
router.register(
    "integrations/google", GoogleIntegrationViewSet, basename="google-integration"
)


app_name = "api"
urlpatterns = router.urls
