import django_filters

from edtech_hub.livesessions.models import LiveSession


class LiveSessionFilter(django_filters.FilterSet):
    classroom = django_filters.NumberFilter(field_name="classroom__id")
    is_live = django_filters.BooleanFilter(field_name="is_live")
    started_after = django_filters.IsoDateTimeFilter(
        field_name="start_time", lookup_expr="gte"
    )
    started_before = django_filters.IsoDateTimeFilter(
        field_name="start_time", lookup_expr="lte"
    )

    class Meta:
        model = LiveSession
        fields = ["classroom", "is_live", "started_after", "started_before"]
