from dataclasses import asdict

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.generics import get_object_or_404
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet
from rest_framework.viewsets import ViewSet

from edtech_hub.common.exceptions import Unauthorized
from edtech_hub.notes import ai
from edtech_hub.notes.models import Note
from edtech_hub.notes.tasks import summarize_note as summarize_note_task

from .serializers import NoteSerializer
from .serializers import NoteSummarySerializer
from .serializers import SummarizeTextSerializer
from .serializers import TranslateRequestSerializer
from .serializers import TranslationSerializer


@extend_schema_view(
    list=extend_schema(
        tags=["Notes"],
        parameters=[OpenApiParameter("session", int, required=False)],
    ),
    create=extend_schema(tags=["Notes"]),
    retrieve=extend_schema(tags=["Notes"]),
    destroy=extend_schema(tags=["Notes"]),
)
class NoteViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    GenericViewSet,
):
    """The caller's own notes, newest first."""

    serializer_class = NoteSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Note.objects.none()
        qs = Note.objects.filter(user=self.request.user).order_by("-created_at")
        session_id = self.request.query_params.get("session")
        if session_id and session_id.isdigit():
            qs = qs.filter(session_id=int(session_id))
        return qs

    def perform_create(self, serializer):
        serializer.save(user=self.request.user, is_ai_generated=False)

    @extend_schema(
        tags=["Notes"],
        request=None,
        parameters=[OpenApiParameter("async", bool, required=False)],
        responses={200: NoteSummarySerializer, 202: None},
    )
    @action(detail=True, methods=["post"])
    def summarize(self, request, pk=None):
        note = get_object_or_404(Note, pk=pk)
        if note.user_id != request.user.pk:
            msg = "Unauthorized"
            raise Unauthorized(msg)
        if request.query_params.get("async") in {"1", "true"}:
            summarize_note_task.delay(note.pk)
            return Response(status=status.HTTP_202_ACCEPTED)
        result = ai.summarize_note(note)
        return Response(NoteSummarySerializer(asdict(result)).data)


class AIViewSet(ViewSet):
    """Stateless AI helpers: translation and quick summaries."""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        tags=["AI"],
        request=TranslateRequestSerializer,
        responses={201: TranslationSerializer},
    )
    @action(detail=False, methods=["post"])
    def translate(self, request):
        ser = TranslateRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        translation = ai.translate_text(
            request.user,
            data["text"],
            data["to_language"],
            from_language=data.get("from_language") or "auto",
            session=data.get("session"),
        )
        return Response(
            TranslationSerializer(translation).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(
        tags=["AI"], request=SummarizeTextSerializer, responses={200: OpenApiTypes.OBJECT}
    )
    @action(detail=False, methods=["post"], url_path="summarize-text")
    def summarize_text(self, request):
        ser = SummarizeTextSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        return Response({"summary": ai.summarize_text(ser.validated_data["text"])})
