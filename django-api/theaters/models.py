"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

from django.db import models

from theaters.domain.value_objects import SeatStatus

SEAT_STATUS_CHOICES = [(status.value, status.value) for status in SeatStatus]


class Theater(models.Model):
    """Persistence model for theaters."""

    name = models.CharField(max_length=255, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Section(models.Model):
    """Persistence model for theater sections."""

    theater = models.ForeignKey(Theater, on_delete=models.CASCADE, related_name="sections")
    name = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["theater", "name"], name="unique_section_name_per_theater"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.theater.name} - {self.name}"


class Row(models.Model):
    """Persistence model for section rows."""

    section = models.ForeignKey(Section, on_delete=models.CASCADE, related_name="rows")
    number = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["number"]
        constraints = [
            models.UniqueConstraint(
                fields=["section", "number"], name="unique_row_number_per_section"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.section.name} - row {self.number}"


class Seat(models.Model):
    """Persistence model for seats."""

    row = models.ForeignKey(Row, on_delete=models.CASCADE, related_name="seats")
    number = models.PositiveIntegerField()
    status = models.CharField(
        max_length=20, choices=SEAT_STATUS_CHOICES, default=SeatStatus.AVAILABLE.value
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["number"]
        constraints = [
            models.UniqueConstraint(fields=["row", "number"], name="unique_seat_number_per_row"),
        ]
        indexes = [
            models.Index(fields=["status"], name="seat_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.row} - seat {self.number}"
