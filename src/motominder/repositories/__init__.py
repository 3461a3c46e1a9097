from .context import PersistenceContext, new_persistence_context
from .base_repository import BaseRepository, ExistsPredicate, UniquePredicate
from .motorcycle_repository import MotorcycleRepository, new_motorcycle_repository

__all__ = [
    "PersistenceContext",
    "new_persistence_context",
    "BaseRepository",
    "ExistsPredicate",
    "UniquePredicate",
    "MotorcycleRepository",
    "new_motorcycle_repository",
]
