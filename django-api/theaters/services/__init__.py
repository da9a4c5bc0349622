from theaters.services.import_service import LayoutImporter
from theaters.services.theater_service import TheaterService

__all__ = ["LayoutImporter", "TheaterService"]
