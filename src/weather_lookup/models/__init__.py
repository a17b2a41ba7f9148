from .base import Base
from .saved_query import SavedQuery

__all__ = [
    "Base",
    "SavedQuery",
]
