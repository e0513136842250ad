"""Pytest configuration for all tests."""

import uuid
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from wastelink.domain.entities import CollectionStatus
from wastelink.infrastructure.auth import hash_password, jwt_service
from wastelink.infrastructure.persistence import models  # noqa: F401
from wastelink.infrastructure.persistence.database import Base
from wastelink.infrastructure.persistence.models import (
    CollectionModel,
    RecyclerModel,
    TransporterModel,
)

RECYCLER_PASSWORD = "GreenCycle123!"


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from wastelink.infrastructure.api.app import app
    from wastelink.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}


async def create_transporter(
    session: AsyncSession,
    name: str = "Ravi Transport",
    email: str | None = None,
) -> TransporterModel:
    transporter = TransporterModel(
        id=str(uuid.uuid4()),
        name=name,
        email=email or f"{uuid.uuid4().hex[:8]}@transport.example.com",
        vehicle_number="KA-01-AB-1234",
    )
    session.add(transporter)
    await session.flush()
    return transporter


async def create_recycler(
    session: AsyncSession,
    name: str = "GreenCycle Facility",
    email: str | None = None,
    password: str = RECYCLER_PASSWORD,
) -> RecyclerModel:
    recycler = RecyclerModel(
        id=str(uuid.uuid4()),
        name=name,
        email=email or f"{uuid.uuid4().hex[:8]}@recycler.example.com",
        password_hash=hash_password(password),
        address="12 Depot Road",
        city="Bengaluru",
        state="Karnataka",
        zip_code="560001",
    )
    session.add(recycler)
    await session.flush()
    return recycler


async def create_collection(
    session: AsyncSession,
    transporter_id: str,
    status: CollectionStatus = CollectionStatus.COLLECTED,
    weight: float | None = None,
    wet: float | None = None,
    dry: float | None = None,
    hazardous: float | None = None,
    recycler_id: str | None = None,
) -> CollectionModel:
    collection = CollectionModel(
        id=str(uuid.uuid4()),
        transporter_id=transporter_id,
        status=status.value,
        weight=weight,
        wet_weight=wet,
        dry_weight=dry,
        hazardous_weight=hazardous,
        recycler_id=recycler_id,
    )
    session.add(collection)
    await session.flush()
    return collection


def recycler_token(recycler: RecyclerModel) -> str:
    return jwt_service.create_access_token(
        subject_id=recycler.id,
        role="recycler",
        email=recycler.email,
    )


@pytest_asyncio.fixture
async def transporter(db_session: AsyncSession) -> TransporterModel:
    """A registered transporter."""
    transporter = await create_transporter(db_session)
    await db_session.commit()
    return transporter


@pytest_asyncio.fixture
async def recycler(db_session: AsyncSession) -> RecyclerModel:
    """A registered recycler with a known password."""
    recycler = await create_recycler(db_session, email="facility@recycler.example.com")
    await db_session.commit()
    return recycler


@pytest_asyncio.fixture
async def auth_headers(recycler: RecyclerModel) -> dict[str, str]:
    """Bearer header carrying a valid session token for ``recycler``."""
    return {"Authorization": f"Bearer {recycler_token(recycler)}"}


@pytest_asyncio.fixture
async def make_transporter(db_session: AsyncSession):
    """Factory for additional transporters."""

    async def _make(**kwargs) -> TransporterModel:
        return await create_transporter(db_session, **kwargs)

    return _make


@pytest_asyncio.fixture
async def make_recycler(db_session: AsyncSession):
    """Factory for additional recyclers."""

    async def _make(**kwargs) -> RecyclerModel:
        return await create_recycler(db_session, **kwargs)

    return _make


@pytest_asyncio.fixture
async def make_collection(db_session: AsyncSession):
    """Factory for collections, flushed but not committed."""

    async def _make(transporter_id: str, **kwargs) -> CollectionModel:
        return await create_collection(db_session, transporter_id, **kwargs)

    return _make


@pytest.fixture
def token_for():
    """Build a session token for any recycler."""
    return recycler_token
