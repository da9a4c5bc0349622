from theaters.handlers.views import SeatBookingView, TheaterDetailView, TheaterListView

__all__ = ["TheaterListView", "TheaterDetailView", "SeatBookingView"]
