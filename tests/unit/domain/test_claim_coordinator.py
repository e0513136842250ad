"""Unit tests for ClaimCoordinator against an in-memory store."""

from unittest.mock import AsyncMock

import pytest

from wastelink.domain.entities import (
    ActingRecycler,
    Collection,
    CollectionStatus,
    Transporter,
)
from wastelink.domain.services import (
    ClaimCoordinator,
    CollectionStore,
    CollectionStoreError,
    InvalidInputError,
    TransporterNotFoundError,
    TransporterRegistry,
    aggregate_weights,
)
from wastelink.domain.services.claim_coordinator import NO_ELIGIBLE_MESSAGE


class InMemoryCollectionStore(CollectionStore):
    """Dict-backed store. ``claim_batch`` re-checks eligibility per record."""

    def __init__(self, collections: list[Collection]) -> None:
        self.collections = {c.id: c for c in collections}
        self.claim_calls = 0

    async def find_eligible(self, transporter_id, status=CollectionStatus.COLLECTED, unclaimed_only=True):
        return [
            Collection(**vars(c))
            for c in self.collections.values()
            if c.transporter_id == transporter_id
            and c.status == status
            and (not unclaimed_only or c.recycler_id is None)
        ]

    async def claim_batch(self, ids, recycler_id, batch_id):
        self.claim_calls += 1
        count = 0
        for collection_id in ids:
            collection = self.collections[collection_id]
            if collection.recycler_id is None and collection.status == CollectionStatus.COLLECTED:
                collection.recycler_id = recycler_id
                collection.status = CollectionStatus.CLAIMED
                collection.claim_batch_id = batch_id
                count += 1
        return count

    async def find_by_claim_batch(self, batch_id):
        return [c for c in self.collections.values() if c.claim_batch_id == batch_id]

    async def list_for_recycler(self, recycler_id, limit=100):
        return [c for c in self.collections.values() if c.recycler_id == recycler_id][:limit]


class RacingCollectionStore(InMemoryCollectionStore):
    """Lets a rival recycler take some records between the read and the claim."""

    def __init__(self, collections, stolen_ids, rival_id="rival") -> None:
        super().__init__(collections)
        self.stolen_ids = stolen_ids
        self.rival_id = rival_id

    async def claim_batch(self, ids, recycler_id, batch_id):
        await super().claim_batch(self.stolen_ids, self.rival_id, "rival-batch")
        return await super().claim_batch(ids, recycler_id, batch_id)


class StaticTransporterRegistry(TransporterRegistry):
    def __init__(self, *transporters: Transporter) -> None:
        self.transporters = {t.id: t for t in transporters}

    async def get_transporter(self, transporter_id):
        return self.transporters.get(transporter_id)


RAVI = Transporter(id="t-ravi", name="Ravi", email="ravi@transport.example.com")
RECYCLER = ActingRecycler(id="r-green", name="GreenCycle")


def collected(collection_id, weight=None, transporter_id=RAVI.id, **waste_types):
    return Collection(
        id=collection_id,
        transporter_id=transporter_id,
        status=CollectionStatus.COLLECTED,
        weight=weight,
        waste_types=waste_types,
    )


def make_coordinator(store):
    return ClaimCoordinator(store=store, transporters=StaticTransporterRegistry(RAVI))


@pytest.mark.asyncio
async def test_claims_all_eligible_collections_and_aggregates():
    store = InMemoryCollectionStore(
        [
            collected("c1", weight=10.0, wet=6.0, dry=4.0),
            collected("c2", weight=7.5, dry=5.0, hazardous=2.5),
            Collection(id="c3", transporter_id=RAVI.id, status=CollectionStatus.PENDING, weight=3.0),
        ]
    )

    summary = await make_coordinator(store).claim_collections(RECYCLER, RAVI.id)

    assert summary.claimed_count == 2
    assert summary.message == "Successfully claimed 2 collections from Ravi."
    assert summary.estimated_total_weight == 17.5
    assert summary.estimated_categorical_weights == {"wet": 6.0, "dry": 9.0, "hazardous": 2.5}
    assert set(summary.collection_ids) == {"c1", "c2"}
    assert store.collections["c1"].recycler_id == RECYCLER.id
    assert store.collections["c1"].status == CollectionStatus.CLAIMED
    assert store.collections["c3"].recycler_id is None


@pytest.mark.asyncio
async def test_second_claim_finds_nothing():
    store = InMemoryCollectionStore([collected("c1", weight=1.0)])
    coordinator = make_coordinator(store)

    first = await coordinator.claim_collections(RECYCLER, RAVI.id)
    second = await coordinator.claim_collections(ActingRecycler(id="r-other", name="Other"), RAVI.id)

    assert first.claimed_count == 1
    assert second.claimed_count == 0
    assert second.message == NO_ELIGIBLE_MESSAGE
    assert store.collections["c1"].recycler_id == RECYCLER.id


@pytest.mark.asyncio
async def test_no_eligible_collections_skips_the_write():
    store = InMemoryCollectionStore([collected("c1", transporter_id="t-someone-else")])

    summary = await make_coordinator(store).claim_collections(RECYCLER, RAVI.id)

    assert summary.claimed_count == 0
    assert summary.estimated_total_weight == 0.0
    assert summary.estimated_categorical_weights == {"wet": 0.0, "dry": 0.0, "hazardous": 0.0}
    assert store.claim_calls == 0


@pytest.mark.asyncio
async def test_partial_claim_reports_only_records_taken():
    store = RacingCollectionStore(
        [
            collected("c1", weight=10.0, wet=10.0),
            collected("c2", weight=5.0, dry=5.0),
            collected("c3", weight=2.0, hazardous=2.0),
        ],
        stolen_ids=["c2"],
    )

    summary = await make_coordinator(store).claim_collections(RECYCLER, RAVI.id)

    assert summary.claimed_count == 2
    assert set(summary.collection_ids) == {"c1", "c3"}
    assert summary.estimated_total_weight == 12.0
    assert summary.estimated_categorical_weights == {"wet": 10.0, "dry": 0.0, "hazardous": 2.0}
    assert store.collections["c2"].recycler_id == "rival"


@pytest.mark.asyncio
async def test_fully_lost_race_returns_empty_summary():
    store = RacingCollectionStore([collected("c1", weight=4.0)], stolen_ids=["c1"])

    summary = await make_coordinator(store).claim_collections(RECYCLER, RAVI.id)

    assert summary.claimed_count == 0
    assert summary.message == NO_ELIGIBLE_MESSAGE


@pytest.mark.asyncio
@pytest.mark.parametrize("scanned", [None, "", "   "])
async def test_empty_scan_is_invalid_input(scanned):
    store = InMemoryCollectionStore([])

    with pytest.raises(InvalidInputError) as exc_info:
        await make_coordinator(store).claim_collections(RECYCLER, scanned)

    assert exc_info.value.message == "Scanned QR code is invalid or empty."


@pytest.mark.asyncio
async def test_unknown_transporter_not_found():
    store = InMemoryCollectionStore([collected("c1", transporter_id="t-ghost")])

    with pytest.raises(TransporterNotFoundError):
        await make_coordinator(store).claim_collections(RECYCLER, "t-ghost")

    assert store.collections["c1"].recycler_id is None


@pytest.mark.asyncio
async def test_scanned_id_is_trimmed():
    store = InMemoryCollectionStore([collected("c1", weight=1.0)])

    summary = await make_coordinator(store).claim_collections(RECYCLER, f"  {RAVI.id}\n")

    assert summary.claimed_count == 1


@pytest.mark.asyncio
async def test_store_failure_propagates():
    store = AsyncMock(spec=CollectionStore)
    store.find_eligible.return_value = [collected("c1", weight=1.0)]
    store.claim_batch.side_effect = CollectionStoreError("Failed to claim collections")

    with pytest.raises(CollectionStoreError):
        await make_coordinator(store).claim_collections(RECYCLER, RAVI.id)


@pytest.mark.asyncio
async def test_claim_batch_receives_candidate_ids_and_one_batch_id():
    store = AsyncMock(spec=CollectionStore)
    store.find_eligible.return_value = [collected("c1"), collected("c2")]
    store.claim_batch.return_value = 2

    await make_coordinator(store).claim_collections(RECYCLER, RAVI.id)

    ids, recycler_id, batch_id = store.claim_batch.await_args.args
    assert ids == ["c1", "c2"]
    assert recycler_id == RECYCLER.id
    assert batch_id
    store.find_by_claim_batch.assert_not_awaited()


def test_aggregate_weights_treats_missing_values_as_zero():
    total, categorical = aggregate_weights(
        [
            collected("c1", weight=None, wet=None),
            collected("c2", weight=3.0, dry=1.5),
        ]
    )

    assert total == 3.0
    assert categorical == {"wet": 0.0, "dry": 1.5, "hazardous": 0.0}
