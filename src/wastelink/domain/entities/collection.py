"""Collection entity for a single waste pickup.

A collection is recorded by the transporter who physically picked the waste
up and is later claimed, exactly once, by a recycler for processing.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class CollectionStatus(str, Enum):
    """Lifecycle states of a collection. Transitions only move forward."""

    PENDING = "Pending"
    COLLECTED = "Collected"
    CLAIMED = "Claimed"
    PROCESSED = "Processed"

    @property
    def rank(self) -> int:
        """Position in the lifecycle, starting at 0 for Pending."""
        return list(CollectionStatus).index(self)

    def can_transition_to(self, target: "CollectionStatus") -> bool:
        """Check whether moving from this status to ``target`` is allowed."""
        return target.rank > self.rank


class WasteCategory(str, Enum):
    """Recognised waste categories for the categorical weight breakdown."""

    WET = "wet"
    DRY = "dry"
    HAZARDOUS = "hazardous"


def empty_category_weights() -> dict[str, float]:
    """Return a breakdown with every recognised category set to zero."""
    return {category.value: 0.0 for category in WasteCategory}


@dataclass
class Collection:
    """Collection entity representing one waste pickup event.

    ``weight`` and ``waste_types`` are independent estimates: the categorical
    breakdown is not required to sum to the total weight.

    Attributes:
        id: Unique identifier (UUID string).
        transporter_id: Transporter who performed the pickup.
        status: Current lifecycle status.
        weight: Total mass of the pickup, None when not recorded.
        waste_types: Mass per waste category; missing categories count as 0.
        recycler_id: Recycler that claimed the collection, None until claimed.
        claim_batch_id: Identifier of the claim operation that took the collection.
        created_at: Timestamp when the collection was recorded.
        claimed_at: Timestamp when the collection was claimed.
    """

    id: str
    transporter_id: str
    status: CollectionStatus = CollectionStatus.PENDING
    weight: float | None = None
    waste_types: dict[str, float | None] = field(default_factory=dict)
    recycler_id: str | None = None
    claim_batch_id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    claimed_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate collection data after initialization."""
        if not self.id:
            raise ValueError("Collection ID is required")
        if not self.transporter_id:
            raise ValueError("Transporter ID is required")
        if self.weight is not None and self.weight < 0:
            raise ValueError("Weight must be non-negative")
        for category, value in self.waste_types.items():
            if value is not None and value < 0:
                raise ValueError(f"Weight for waste type '{category}' must be non-negative")

    @property
    def is_claimed(self) -> bool:
        """Check if a recycler has claimed this collection."""
        return self.recycler_id is not None

    def is_eligible_for(self, transporter_id: str) -> bool:
        """Check if this collection can be claimed through ``transporter_id``."""
        return (
            self.transporter_id == transporter_id
            and self.status == CollectionStatus.COLLECTED
            and not self.is_claimed
        )

    def category_weight(self, category: WasteCategory) -> float:
        """Get the recorded mass for a category, 0 when absent."""
        return self.waste_types.get(category.value) or 0.0
