"""Transporter repository for database operations."""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wastelink.core.logging import get_logger
from wastelink.domain.entities import Transporter
from wastelink.domain.services import CollectionStoreError, TransporterRegistry
from wastelink.infrastructure.persistence.models import TransporterModel

logger = get_logger(__name__)


class TransporterRepository(TransporterRegistry):
    """Repository for transporter database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, transporter: TransporterModel) -> TransporterModel:
        """Create a new transporter.

        Args:
            transporter: Transporter model to create.

        Returns:
            Created transporter model.
        """
        self.session.add(transporter)
        await self.session.flush()
        return transporter

    async def get_by_id(self, transporter_id: str) -> TransporterModel | None:
        """Get a transporter by ID.

        Args:
            transporter_id: Transporter ID (UUID string).

        Returns:
            Transporter model if found, None otherwise.
        """
        result = await self.session.execute(
            select(TransporterModel).where(TransporterModel.id == transporter_id)
        )
        return result.scalar_one_or_none()

    async def get_transporter(self, transporter_id: str) -> Transporter | None:
        try:
            model = await self.get_by_id(transporter_id)
        except SQLAlchemyError as e:
            logger.error("Transporter lookup failed", transporter_id=transporter_id, error=str(e))
            raise CollectionStoreError("Failed to look up transporter") from e

        if model is None:
            return None
        return Transporter(
            id=model.id,
            name=model.name,
            email=model.email,
            vehicle_number=model.vehicle_number,
            created_at=model.created_at,
        )
