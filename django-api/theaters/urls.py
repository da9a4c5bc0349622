from django.urls import path

from theaters.handlers import SeatBookingView, TheaterDetailView, TheaterListView

urlpatterns = [
    path("theaters", TheaterListView.as_view(), name="theater-list"),
    path("theaters/<int:theater_id>", TheaterDetailView.as_view(), name="theater-detail"),
    path("seats/<int:seat_id>/booking", SeatBookingView.as_view(), name="seat-booking"),
]
