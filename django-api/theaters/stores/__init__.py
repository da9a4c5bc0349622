from theaters.stores.django_store import DjangoTheaterStore
from theaters.stores.interfaces import TheaterStore
from theaters.stores.memory_store import InMemoryTheaterStore

__all__ = ["TheaterStore", "DjangoTheaterStore", "InMemoryTheaterStore"]
