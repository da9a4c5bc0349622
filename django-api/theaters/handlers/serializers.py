"""Serializers for transforming domain models to API responses."""

from rest_framework import serializers

from theaters.domain import SectionPlan
from theaters.handlers.rendering import STATUS_LABELS


class TheaterSummarySerializer(serializers.Serializer):
    """Serializer for TheaterSummary domain model."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    total_seats = serializers.IntegerField()
    available_seats = serializers.IntegerField()


class SeatSerializer(serializers.Serializer):
    """Serializer for Seat domain model."""

    id = serializers.IntegerField()
    number = serializers.IntegerField()
    status = serializers.CharField(source="status.value")
    status_label = serializers.SerializerMethodField()

    def get_status_label(self, seat) -> str:
        return STATUS_LABELS[seat.status]


class RowSerializer(serializers.Serializer):
    """Serializer for Row domain model."""

    id = serializers.IntegerField()
    number = serializers.IntegerField()
    seats = SeatSerializer(many=True)


class SectionSerializer(serializers.Serializer):
    """Serializer for Section domain model."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    total_seats = serializers.IntegerField()
    available_seats = serializers.IntegerField()
    rows = RowSerializer(many=True)


class TheaterLayoutSerializer(serializers.Serializer):
    """Serializer for a Theater with its full layout."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    total_seats = serializers.IntegerField()
    available_seats = serializers.IntegerField()
    sections = SectionSerializer(many=True)


class SectionPlanSerializer(serializers.Serializer):
    """One custom section: an optional name and a seat count per row."""

    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    seats_per_row = serializers.ListField(
        child=serializers.IntegerField(min_value=1), allow_empty=False
    )

    def to_internal_value(self, data):
        attrs = super().to_internal_value(data)
        return SectionPlan(
            name=attrs.get("name") or None, seats_per_row=tuple(attrs["seats_per_row"])
        )


class CreateTheaterSerializer(serializers.Serializer):
    """Input for creating a theater with an optional uniform or custom layout."""

    LAYOUT_FIELDS = ("sections", "rows_per_section", "seats_per_row")

    name = serializers.CharField(max_length=255)
    sections = serializers.IntegerField(min_value=1, required=False)
    rows_per_section = serializers.IntegerField(min_value=1, required=False)
    seats_per_row = serializers.IntegerField(min_value=1, required=False)
    section_plans = SectionPlanSerializer(many=True, required=False, allow_empty=False)

    def validate(self, attrs):
        given = [field for field in self.LAYOUT_FIELDS if field in attrs]
        if given and len(given) != len(self.LAYOUT_FIELDS):
            raise serializers.ValidationError(
                "sections, rows_per_section and seats_per_row must be given together"
            )
        if given and "section_plans" in attrs:
            raise serializers.ValidationError(
                "section_plans cannot be combined with a uniform layout"
            )
        return attrs

    @property
    def has_layout(self) -> bool:
        return "sections" in self.validated_data

    @property
    def has_custom_layout(self) -> bool:
        return "section_plans" in self.validated_data
