"""Unit tests for RecyclerRepository and TransporterRepository."""

import pytest

from wastelink.infrastructure.persistence.repositories import (
    RecyclerRepository,
    TransporterRepository,
)


@pytest.mark.asyncio
async def test_get_by_email_is_case_insensitive(db_session, make_recycler):
    recycler = await make_recycler(email="ops@greencycle.example.com")

    found = await RecyclerRepository(db_session).get_by_email("OPS@GreenCycle.example.com")

    assert found is not None
    assert found.id == recycler.id


@pytest.mark.asyncio
async def test_email_exists_can_exclude_the_owner(db_session, make_recycler):
    recycler = await make_recycler(email="ops@greencycle.example.com")
    repo = RecyclerRepository(db_session)

    assert await repo.email_exists("ops@greencycle.example.com")
    assert not await repo.email_exists("ops@greencycle.example.com", exclude_id=recycler.id)
    assert not await repo.email_exists("nobody@example.com")


@pytest.mark.asyncio
async def test_get_transporter_returns_domain_entity(db_session, make_transporter):
    model = await make_transporter(name="Ravi")

    transporter = await TransporterRepository(db_session).get_transporter(model.id)

    assert transporter is not None
    assert transporter.id == model.id
    assert transporter.name == "Ravi"


@pytest.mark.asyncio
async def test_get_transporter_unknown_id(db_session):
    assert await TransporterRepository(db_session).get_transporter("missing") is None
