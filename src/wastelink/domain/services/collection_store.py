"""Persistence interfaces consumed by the claim workflow.

Defines the contracts the claim coordinator depends on. Implementations live
in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from wastelink.domain.entities import Collection, CollectionStatus, Transporter


class CollectionStoreError(Exception):
    """Raised when the collection store fails to read or write."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CollectionStore(ABC):
    """Durable storage for collection records.

    ``claim_batch`` is the correctness boundary of the claim workflow: the
    unclaimed condition must be re-checked inside the same atomic write, so
    two concurrent claims over the same records can never both take one.
    """

    @abstractmethod
    async def find_eligible(
        self,
        transporter_id: str,
        status: CollectionStatus = CollectionStatus.COLLECTED,
        unclaimed_only: bool = True,
    ) -> list[Collection]:
        """Find collections of a transporter in the given status.

        The result must come from a single consistent read.

        Args:
            transporter_id: Transporter who performed the pickups.
            status: Required collection status.
            unclaimed_only: Only return collections without a recycler.

        Returns:
            Matching collections.

        Raises:
            CollectionStoreError: If the query fails.
        """
        pass

    @abstractmethod
    async def claim_batch(
        self, ids: Iterable[str], recycler_id: str, batch_id: str
    ) -> int:
        """Atomically assign a recycler to every still-unclaimed collection in ``ids``.

        Records claimed by someone else since they were read are skipped.

        Args:
            ids: Collection IDs selected for the claim.
            recycler_id: Recycler taking ownership.
            batch_id: Identifier of this claim operation, stored on every
                record it takes.

        Returns:
            Number of records actually claimed.

        Raises:
            CollectionStoreError: If the write fails. Nothing is claimed in that case.
        """
        pass

    @abstractmethod
    async def find_by_claim_batch(self, batch_id: str) -> list[Collection]:
        """Return the collections taken by a given claim operation.

        Raises:
            CollectionStoreError: If the query fails.
        """
        pass

    @abstractmethod
    async def list_for_recycler(self, recycler_id: str, limit: int = 100) -> list[Collection]:
        """Return the collections claimed by a recycler, newest first.

        Raises:
            CollectionStoreError: If the query fails.
        """
        pass


class TransporterRegistry(ABC):
    """Lookup of registered transporters."""

    @abstractmethod
    async def get_transporter(self, transporter_id: str) -> Transporter | None:
        """Resolve a transporter by ID.

        Returns:
            The transporter, or None if the ID is unknown.

        Raises:
            CollectionStoreError: If the lookup fails.
        """
        pass
