import django_filters

from edtech_hub.reports.models import PerformanceReport


class PerformanceReportFilter(django_filters.FilterSet):
    student = django_filters.NumberFilter(field_name="student__id")
    classroom = django_filters.NumberFilter(field_name="classroom__id")
    report_type = django_filters.CharFilter(field_name="report_type", lookup_expr="iexact")
    # Window on the report end date
    start_date = django_filters.IsoDateTimeFilter(field_name="end_date", lookup_expr="gte")
    end_date = django_filters.IsoDateTimeFilter(field_name="end_date", lookup_expr="lte")

    class Meta:
        model = PerformanceReport
        fields = ["student", "classroom", "report_type", "start_date", "end_date"]
