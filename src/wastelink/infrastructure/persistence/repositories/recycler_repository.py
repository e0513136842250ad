"""Recycler repository for database operations."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from wastelink.infrastructure.persistence.models import RecyclerModel


class RecyclerRepository:
    """Repository for recycler database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, recycler: RecyclerModel) -> RecyclerModel:
        """Create a new recycler.

        Args:
            recycler: Recycler model to create.

        Returns:
            Created recycler model.
        """
        self.session.add(recycler)
        await self.session.flush()
        return recycler

    async def get_by_id(self, recycler_id: str) -> RecyclerModel | None:
        """Get a recycler by ID.

        Args:
            recycler_id: Recycler ID (UUID string).

        Returns:
            Recycler model if found, None otherwise.
        """
        result = await self.session.execute(
            select(RecyclerModel).where(RecyclerModel.id == recycler_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> RecyclerModel | None:
        """Get a recycler by email, case-insensitively.

        Args:
            email: Login email address.

        Returns:
            Recycler model if found, None otherwise.
        """
        result = await self.session.execute(
            select(RecyclerModel).where(func.lower(RecyclerModel.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str, exclude_id: str | None = None) -> bool:
        """Check if an email is already registered.

        Args:
            email: Email to check.
            exclude_id: Recycler ID to ignore (the recycler being updated).

        Returns:
            True if another recycler uses the email, False otherwise.
        """
        stmt = select(RecyclerModel.id).where(func.lower(RecyclerModel.email) == email.lower())
        if exclude_id is not None:
            stmt = stmt.where(RecyclerModel.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None
