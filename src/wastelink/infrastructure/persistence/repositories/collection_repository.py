"""Collection repository for database operations.

SQLAlchemy implementation of the CollectionStore used by the claim workflow.
"""

from collections.abc import Iterable
from datetime import datetime, timezone

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wastelink.core.logging import get_logger
from wastelink.domain.entities import Collection, CollectionStatus
from wastelink.domain.services import CollectionStore, CollectionStoreError
from wastelink.infrastructure.persistence.models import CollectionModel

logger = get_logger(__name__)


class CollectionRepository(CollectionStore):
    """Repository for waste collection database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, collection: CollectionModel) -> CollectionModel:
        """Create a new collection.

        Args:
            collection: Collection model to create.

        Returns:
            Created collection model.
        """
        self.session.add(collection)
        await self.session.flush()
        return collection

    async def get_by_id(self, collection_id: str) -> CollectionModel | None:
        """Get a collection by ID.

        Args:
            collection_id: Collection ID (UUID string).

        Returns:
            Collection model if found, None otherwise.
        """
        result = await self.session.execute(
            select(CollectionModel)
            .where(CollectionModel.id == collection_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def find_eligible(
        self,
        transporter_id: str,
        status: CollectionStatus = CollectionStatus.COLLECTED,
        unclaimed_only: bool = True,
    ) -> list[Collection]:
        stmt = select(CollectionModel).where(
            CollectionModel.transporter_id == transporter_id,
            CollectionModel.status == status.value,
        )
        if unclaimed_only:
            stmt = stmt.where(CollectionModel.recycler_id.is_(None))
        stmt = stmt.order_by(CollectionModel.created_at).execution_options(
            populate_existing=True
        )

        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(
                "Eligible collection query failed",
                transporter_id=transporter_id,
                error=str(e),
            )
            raise CollectionStoreError("Failed to query collections") from e

        return [model.to_entity() for model in result.scalars().all()]

    async def claim_batch(
        self, ids: Iterable[str], recycler_id: str, batch_id: str
    ) -> int:
        """Claim collections with a single guarded UPDATE.

        The WHERE clause re-checks ``recycler_id IS NULL`` and the Collected
        status, so rows taken by a concurrent claim after the eligibility read
        are left untouched and not counted.
        """
        id_list = list(dict.fromkeys(ids))
        if not id_list:
            return 0

        stmt = (
            update(CollectionModel)
            .where(
                CollectionModel.id.in_(id_list),
                CollectionModel.recycler_id.is_(None),
                CollectionModel.status == CollectionStatus.COLLECTED.value,
            )
            .values(
                recycler_id=recycler_id,
                status=CollectionStatus.CLAIMED.value,
                claim_batch_id=batch_id,
                claimed_at=datetime.now(timezone.utc),
            )
            .execution_options(synchronize_session=False)
        )

        try:
            result = await self.session.execute(stmt)
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error(
                "Claim batch update failed",
                recycler_id=recycler_id,
                batch_id=batch_id,
                requested=len(id_list),
                error=str(e),
            )
            raise CollectionStoreError("Failed to claim collections") from e

        return result.rowcount

    async def find_by_claim_batch(self, batch_id: str) -> list[Collection]:
        try:
            result = await self.session.execute(
                select(CollectionModel)
                .where(CollectionModel.claim_batch_id == batch_id)
                .order_by(CollectionModel.created_at)
                .execution_options(populate_existing=True)
            )
        except SQLAlchemyError as e:
            logger.error("Claim batch lookup failed", batch_id=batch_id, error=str(e))
            raise CollectionStoreError("Failed to query collections") from e

        return [model.to_entity() for model in result.scalars().all()]

    async def list_for_recycler(self, recycler_id: str, limit: int = 100) -> list[Collection]:
        try:
            result = await self.session.execute(
                select(CollectionModel)
                .where(CollectionModel.recycler_id == recycler_id)
                .order_by(
                    CollectionModel.claimed_at.desc(),
                    CollectionModel.created_at.desc(),
                )
                .limit(limit)
                .execution_options(populate_existing=True)
            )
        except SQLAlchemyError as e:
            logger.error("Collection history query failed", recycler_id=recycler_id, error=str(e))
            raise CollectionStoreError("Failed to query collections") from e

        return [model.to_entity() for model in result.scalars().all()]
