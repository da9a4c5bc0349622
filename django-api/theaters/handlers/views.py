"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from theaters.domain.errors import DomainError, ErrorCode
from theaters.handlers.serializers import (
    CreateTheaterSerializer,
    TheaterLayoutSerializer,
    TheaterSummarySerializer,
)
from theaters.services import TheaterService
from theaters.stores import DjangoTheaterStore

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.THEATER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SEAT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.DUPLICATE_THEATER_NAME: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_THEATER_NAME: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_LAYOUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.STORE_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(error: DomainError) -> Response:
    http_status = ERROR_STATUS.get(error.code, status.HTTP_400_BAD_REQUEST)
    message = error.message
    if error.code is ErrorCode.STORE_FAILURE:
        logger.error("Store failure: %s", error.message)
        message = "The theater store is unavailable"
    return Response(
        {"error": {"code": error.code.value, "message": message}},
        status=http_status,
    )


class TheaterServiceMixin:
    def get_service(self) -> TheaterService:
        return TheaterService(DjangoTheaterStore())


class TheaterListView(TheaterServiceMixin, APIView):
    """Handler for GET/POST /api/theaters"""

    def get(self, request: Request) -> Response:
        try:
            theaters = self.get_service().list_theaters()
        except DomainError as exc:
            return error_response(exc)
        return Response(TheaterSummarySerializer(theaters, many=True).data)

    def post(self, request: Request) -> Response:
        serializer = CreateTheaterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        service = self.get_service()

        try:
            if serializer.has_custom_layout:
                theater_id = service.create_custom_layout(data["name"], data["section_plans"]).id
            elif serializer.has_layout:
                theater_id = service.create_uniform_layout(
                    data["name"], data["sections"], data["rows_per_section"], data["seats_per_row"]
                ).id
            else:
                theater_id = service.create_theater(data["name"])
            theater = service.get_theater_layout(theater_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(TheaterLayoutSerializer(theater).data, status=status.HTTP_201_CREATED)


class TheaterDetailView(TheaterServiceMixin, APIView):
    """Handler for GET/DELETE /api/theaters/{theater_id}"""

    def get(self, request: Request, theater_id: int) -> Response:
        try:
            theater = self.get_service().get_theater_layout(theater_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(TheaterLayoutSerializer(theater).data)

    def delete(self, request: Request, theater_id: int) -> Response:
        try:
            self.get_service().delete_theater(theater_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SeatBookingView(TheaterServiceMixin, APIView):
    """Handler for POST/DELETE /api/seats/{seat_id}/booking"""

    def post(self, request: Request, seat_id: int) -> Response:
        try:
            booked = self.get_service().book_seat(seat_id)
        except DomainError as exc:
            return error_response(exc)
        if not booked:
            return _not_applicable("Seat is not available")
        return Response({"seat_id": seat_id, "status": "BOOKED"})

    def delete(self, request: Request, seat_id: int) -> Response:
        try:
            cancelled = self.get_service().cancel_booking(seat_id)
        except DomainError as exc:
            return error_response(exc)
        if not cancelled:
            return _not_applicable("Seat is not booked")
        return Response({"seat_id": seat_id, "status": "AVAILABLE"})


def _not_applicable(message: str) -> Response:
    return Response(
        {"error": {"code": "SEAT_STATE_CONFLICT", "message": message}},
        status=status.HTTP_409_CONFLICT,
    )
