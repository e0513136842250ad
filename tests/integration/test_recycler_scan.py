"""Integration tests for the QR scan claim endpoint and collection history."""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from wastelink.domain.entities import CollectionStatus
from wastelink.domain.services import CollectionStoreError
from wastelink.infrastructure.persistence.models import CollectionModel
from wastelink.infrastructure.persistence.repositories import CollectionRepository

SCAN_URL = "/api/recycler/scan"
HISTORY_URL = "/api/recycler/collections"


async def seed_three_collections(make_collection, transporter_id):
    await make_collection(transporter_id, weight=10.0, wet=10.0, dry=0.0, hazardous=0.0)
    await make_collection(transporter_id, weight=5.0, wet=0.0, dry=5.0, hazardous=0.0)
    await make_collection(transporter_id, weight=2.5, wet=0.0, dry=0.0, hazardous=2.5)


@pytest.mark.asyncio
async def test_scan_claims_every_collected_record(
    client: AsyncClient,
    db_session: AsyncSession,
    transporter,
    recycler,
    auth_headers,
    make_collection,
):
    await seed_three_collections(make_collection, transporter.id)
    await db_session.commit()

    res = await client.post(
        SCAN_URL, json={"scannedTransporterId": transporter.id}, headers=auth_headers
    )

    assert res.status_code == 200
    data = res.json()
    assert data["claimedCount"] == 3
    assert data["estimatedTotalWeight"] == 17.5
    assert data["estimatedCategoricalWeights"] == {"wet": 10.0, "dry": 5.0, "hazardous": 2.5}
    assert data["message"] == f"Successfully claimed 3 collections from {transporter.name}."

    result = await db_session.execute(
        select(CollectionModel).execution_options(populate_existing=True)
    )
    rows = result.scalars().all()
    assert {row.recycler_id for row in rows} == {recycler.id}
    assert {row.status for row in rows} == {CollectionStatus.CLAIMED.value}


@pytest.mark.asyncio
async def test_second_scan_claims_nothing(
    client: AsyncClient,
    db_session: AsyncSession,
    transporter,
    make_recycler,
    make_collection,
    auth_headers,
    token_for,
):
    await seed_three_collections(make_collection, transporter.id)
    rival = await make_recycler(name="Rival Recycling")
    await db_session.commit()

    first = await client.post(
        SCAN_URL, json={"scannedTransporterId": transporter.id}, headers=auth_headers
    )
    second = await client.post(
        SCAN_URL,
        json={"scannedTransporterId": transporter.id},
        headers={"Authorization": f"Bearer {token_for(rival)}"},
    )

    assert first.json()["claimedCount"] == 3
    assert second.status_code == 200
    assert second.json() == {
        "message": "No new collected items were available to be claimed from this transporter.",
        "claimedCount": 0,
    }


@pytest.mark.asyncio
async def test_scan_ignores_pending_and_claimed_records(
    client: AsyncClient,
    db_session: AsyncSession,
    transporter,
    make_recycler,
    make_collection,
    auth_headers,
):
    other = await make_recycler(name="Earlier Claimant")
    await make_collection(transporter.id, status=CollectionStatus.PENDING, weight=1.0)
    await make_collection(
        transporter.id, status=CollectionStatus.CLAIMED, weight=2.0, recycler_id=other.id
    )
    await make_collection(transporter.id, weight=4.0, dry=4.0)
    await db_session.commit()

    res = await client.post(
        SCAN_URL, json={"scannedTransporterId": transporter.id}, headers=auth_headers
    )

    data = res.json()
    assert data["claimedCount"] == 1
    assert data["estimatedTotalWeight"] == 4.0
    assert data["estimatedCategoricalWeights"] == {"wet": 0.0, "dry": 4.0, "hazardous": 0.0}


@pytest.mark.asyncio
async def test_scan_with_nothing_collected_omits_weights(
    client: AsyncClient, transporter, auth_headers
):
    res = await client.post(
        SCAN_URL, json={"scannedTransporterId": transporter.id}, headers=auth_headers
    )

    assert res.status_code == 200
    data = res.json()
    assert data["claimedCount"] == 0
    assert "estimatedTotalWeight" not in data
    assert "estimatedCategoricalWeights" not in data


@pytest.mark.asyncio
async def test_scan_unknown_transporter_returns_404(client: AsyncClient, auth_headers):
    res = await client.post(
        SCAN_URL, json={"scannedTransporterId": "no-such-transporter"}, headers=auth_headers
    )

    assert res.status_code == 404
    assert res.json()["message"] == "Transporter not found. The QR code may be invalid."


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"scannedTransporterId": ""}, {"scannedTransporterId": "  "}])
async def test_scan_empty_id_returns_400(client: AsyncClient, auth_headers, body):
    res = await client.post(SCAN_URL, json=body, headers=auth_headers)

    assert res.status_code == 400
    assert res.json()["message"] == "Scanned QR code is invalid or empty."


@pytest.mark.asyncio
async def test_scan_without_body_returns_400(client: AsyncClient, auth_headers):
    res = await client.post(SCAN_URL, headers=auth_headers)

    assert res.status_code == 400


@pytest.mark.asyncio
async def test_scan_requires_authentication(client: AsyncClient, transporter):
    res = await client.post(SCAN_URL, json={"scannedTransporterId": transporter.id})

    assert res.status_code == 401


@pytest.mark.asyncio
async def test_scan_rejects_invalid_token(client: AsyncClient, transporter):
    res = await client.post(
        SCAN_URL,
        json={"scannedTransporterId": transporter.id},
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert res.status_code == 401


@pytest.mark.asyncio
async def test_scan_accepts_session_cookie(
    client: AsyncClient, db_session: AsyncSession, transporter, recycler, make_collection, token_for
):
    await make_collection(transporter.id, weight=1.0)
    await db_session.commit()

    res = await client.post(
        SCAN_URL,
        json={"scannedTransporterId": transporter.id},
        headers={"Cookie": f"jwt={token_for(recycler)}"},
    )

    assert res.status_code == 200
    assert res.json()["claimedCount"] == 1


@pytest.mark.asyncio
async def test_history_lists_claimed_collections(
    client: AsyncClient,
    db_session: AsyncSession,
    transporter,
    make_collection,
    auth_headers,
):
    await seed_three_collections(make_collection, transporter.id)
    await make_collection(transporter.id, status=CollectionStatus.PENDING)
    await db_session.commit()

    before = await client.get(HISTORY_URL, headers=auth_headers)
    assert before.json() == {"items": [], "total": 0}

    await client.post(
        SCAN_URL, json={"scannedTransporterId": transporter.id}, headers=auth_headers
    )
    res = await client.get(HISTORY_URL, headers=auth_headers)

    assert res.status_code == 200
    data = res.json()
    assert data["total"] == 3
    assert {item["status"] for item in data["items"]} == {"Claimed"}
    assert {item["transporterId"] for item in data["items"]} == {transporter.id}
    assert sorted(item["weight"] for item in data["items"]) == [2.5, 5.0, 10.0]
    assert all(item["claimedAt"] is not None for item in data["items"])


@pytest.mark.asyncio
async def test_history_requires_authentication(client: AsyncClient):
    res = await client.get(HISTORY_URL)

    assert res.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "failure",
    [
        CollectionStoreError("Failed to claim collections"),
        OperationalError(
            "UPDATE waste_collections SET recycler_id=?", {}, Exception("disk I/O error")
        ),
    ],
)
async def test_scan_store_failure_returns_generic_500(
    client: AsyncClient,
    db_session: AsyncSession,
    transporter,
    make_collection,
    auth_headers,
    failure,
):
    await seed_three_collections(make_collection, transporter.id)
    await db_session.commit()

    with patch.object(CollectionRepository, "claim_batch", AsyncMock(side_effect=failure)):
        res = await client.post(
            SCAN_URL, json={"scannedTransporterId": transporter.id}, headers=auth_headers
        )

    assert res.status_code == 500
    assert res.json() == {
        "error": "Internal server error",
        "message": "Server error while processing the scan.",
    }
    assert "waste_collections" not in res.text
    assert "disk I/O" not in res.text

    result = await db_session.execute(
        select(CollectionModel).execution_options(populate_existing=True)
    )
    rows = result.scalars().all()
    assert len(rows) == 3
    assert all(row.recycler_id is None for row in rows)
    assert {row.status for row in rows} == {CollectionStatus.COLLECTED.value}
