"""Domain services for WasteLink.

Services contain business logic that doesn't naturally fit within a single entity.
They have no dependencies on infrastructure or external frameworks.
"""

from wastelink.domain.services.claim_coordinator import (
    ClaimCoordinator,
    ClaimError,
    ClaimSummary,
    InvalidInputError,
    TransporterNotFoundError,
    aggregate_weights,
)
from wastelink.domain.services.collection_store import (
    CollectionStore,
    CollectionStoreError,
    TransporterRegistry,
)

__all__ = [
    "ClaimCoordinator",
    "ClaimError",
    "ClaimSummary",
    "CollectionStore",
    "CollectionStoreError",
    "InvalidInputError",
    "TransporterNotFoundError",
    "TransporterRegistry",
    "aggregate_weights",
]
