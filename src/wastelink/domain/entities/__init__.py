"""Domain entities for WasteLink.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from wastelink.domain.entities.collection import (
    Collection,
    CollectionStatus,
    WasteCategory,
    empty_category_weights,
)
from wastelink.domain.entities.recycler import ActingRecycler
from wastelink.domain.entities.transporter import Transporter

__all__ = [
    "ActingRecycler",
    "Collection",
    "CollectionStatus",
    "Transporter",
    "WasteCategory",
    "empty_category_weights",
]
