"""Claim workflow for collected waste.

A recycler scans a transporter's QR code and takes ownership of every
collection that transporter has picked up and that no recycler has claimed
yet. The coordinator selects candidates, aggregates their weights and hands
the ownership transfer to a single guarded write in the store.
"""

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field

from wastelink.core.logging import get_logger
from wastelink.domain.entities import (
    ActingRecycler,
    Collection,
    CollectionStatus,
    WasteCategory,
    empty_category_weights,
)
from wastelink.domain.services.collection_store import (
    CollectionStore,
    TransporterRegistry,
)

logger = get_logger(__name__)

NO_ELIGIBLE_MESSAGE = "No new collected items were available to be claimed from this transporter."


class ClaimError(Exception):
    """Base exception for claim failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(ClaimError):
    """Raised when the scanned identifier is missing or empty."""

    pass


class TransporterNotFoundError(ClaimError):
    """Raised when the scanned identifier does not resolve to a transporter."""

    pass


@dataclass(frozen=True)
class ClaimSummary:
    """Outcome of a claim operation.

    Attributes:
        message: Human-readable result.
        claimed_count: Number of collections this operation took.
        estimated_total_weight: Sum of the claimed collections' weights.
        estimated_categorical_weights: Sum per waste category.
        collection_ids: IDs of the claimed collections.
    """

    message: str
    claimed_count: int
    estimated_total_weight: float = 0.0
    estimated_categorical_weights: dict[str, float] = field(
        default_factory=empty_category_weights
    )
    collection_ids: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "ClaimSummary":
        return cls(message=NO_ELIGIBLE_MESSAGE, claimed_count=0)


def aggregate_weights(
    collections: Sequence[Collection],
) -> tuple[float, dict[str, float]]:
    """Sum total and per-category weights, treating missing values as 0.

    Args:
        collections: Collections to aggregate.

    Returns:
        Tuple of (total weight, weight per category).
    """
    total = 0.0
    categorical = empty_category_weights()
    for collection in collections:
        total += collection.weight or 0.0
        for category in WasteCategory:
            categorical[category.value] += collection.category_weight(category)
    return total, categorical


class ClaimCoordinator:
    """Coordinates recycler claims over transporter collections.

    Holds no state between calls; atomicity is delegated to
    ``CollectionStore.claim_batch``.
    """

    def __init__(self, store: CollectionStore, transporters: TransporterRegistry) -> None:
        """Initialize the coordinator.

        Args:
            store: Collection store used for the eligibility read and the claim.
            transporters: Registry used to resolve the scanned transporter.
        """
        self._store = store
        self._transporters = transporters

    async def claim_collections(
        self,
        acting_recycler: ActingRecycler,
        scanned_transporter_id: str | None,
    ) -> ClaimSummary:
        """Claim every eligible collection of the scanned transporter.

        Args:
            acting_recycler: The authenticated recycler taking ownership.
            scanned_transporter_id: Identifier decoded from the QR code.

        Returns:
            ClaimSummary over exactly the collections this call claimed.

        Raises:
            InvalidInputError: If the scanned identifier is empty.
            TransporterNotFoundError: If no transporter has that identifier.
            CollectionStoreError: If the store fails.
        """
        transporter_id = (scanned_transporter_id or "").strip()
        if not transporter_id:
            raise InvalidInputError("Scanned QR code is invalid or empty.")

        transporter = await self._transporters.get_transporter(transporter_id)
        if transporter is None:
            logger.info(
                "Claim rejected: unknown transporter",
                recycler_id=acting_recycler.id,
                transporter_id=transporter_id,
            )
            raise TransporterNotFoundError("Transporter not found. The QR code may be invalid.")

        logger.info(
            "Recycler claiming collections",
            recycler_id=acting_recycler.id,
            recycler_name=acting_recycler.name,
            transporter_id=transporter.id,
            transporter_name=transporter.name,
        )

        candidates = await self._store.find_eligible(
            transporter.id,
            status=CollectionStatus.COLLECTED,
            unclaimed_only=True,
        )
        if not candidates:
            logger.info(
                "No collected items to claim",
                recycler_id=acting_recycler.id,
                transporter_id=transporter.id,
            )
            return ClaimSummary.empty()

        batch_id = str(uuid.uuid4())
        candidate_ids = [collection.id for collection in candidates]
        claimed_count = await self._store.claim_batch(
            candidate_ids, acting_recycler.id, batch_id
        )

        claimed = candidates
        if claimed_count != len(candidates):
            # A concurrent claim won part of the batch; only report what we took
            claimed = await self._store.find_by_claim_batch(batch_id)
            logger.warning(
                "Partial claim: collections taken by a concurrent claim",
                recycler_id=acting_recycler.id,
                transporter_id=transporter.id,
                candidate_count=len(candidates),
                claimed_count=len(claimed),
                batch_id=batch_id,
            )
            if not claimed:
                return ClaimSummary.empty()

        total_weight, categorical_weights = aggregate_weights(claimed)

        logger.info(
            "Collections claimed",
            recycler_id=acting_recycler.id,
            transporter_id=transporter.id,
            claimed_count=len(claimed),
            estimated_total_weight=total_weight,
            batch_id=batch_id,
        )

        return ClaimSummary(
            message=(
                f"Successfully claimed {len(claimed)} collections from {transporter.name}."
            ),
            claimed_count=len(claimed),
            estimated_total_weight=total_weight,
            estimated_categorical_weights=categorical_weights,
            collection_ids=tuple(collection.id for collection in claimed),
        )
