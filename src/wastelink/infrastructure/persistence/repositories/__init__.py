"""Persistence repositories for database operations."""

from wastelink.infrastructure.persistence.repositories.collection_repository import (
    CollectionRepository,
)
from wastelink.infrastructure.persistence.repositories.recycler_repository import (
    RecyclerRepository,
)
from wastelink.infrastructure.persistence.repositories.transporter_repository import (
    TransporterRepository,
)

__all__ = [
    "CollectionRepository",
    "RecyclerRepository",
    "TransporterRepository",
]
