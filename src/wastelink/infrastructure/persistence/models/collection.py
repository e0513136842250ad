"""SQLAlchemy model for the waste_collections table.

Each row is one pickup recorded by a transporter. ``recycler_id`` stays NULL
until a recycler claims the row and is written at most once.
"""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wastelink.domain.entities import Collection, CollectionStatus, WasteCategory
from wastelink.infrastructure.persistence.database import Base


class CollectionModel(Base):
    """SQLAlchemy model for the waste_collections table.

    The categorical breakdown is stored as one column per waste category.
    """

    __tablename__ = "waste_collections"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Collection ID (UUID)",
    )
    transporter_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("transporters.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
        comment="Transporter who performed the pickup",
    )
    recycler_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("recyclers.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
        comment="Recycler that claimed the collection (set once)",
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=CollectionStatus.PENDING.value,
        comment="Pending, Collected, Claimed or Processed",
    )
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    wet_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    dry_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    hazardous_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    claim_batch_id: Mapped[str | None] = mapped_column(
        String(36),
        nullable=True,
        index=True,
        comment="Claim operation that took the collection",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    claimed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    transporter: Mapped["TransporterModel"] = relationship(  # noqa: F821
        "TransporterModel",
        back_populates="collections",
    )
    recycler: Mapped["RecyclerModel"] = relationship(  # noqa: F821
        "RecyclerModel",
        back_populates="collections",
    )

    __table_args__ = (
        CheckConstraint("weight IS NULL OR weight >= 0", name="ck_waste_collections_weight"),
        CheckConstraint(
            "wet_weight IS NULL OR wet_weight >= 0", name="ck_waste_collections_wet_weight"
        ),
        CheckConstraint(
            "dry_weight IS NULL OR dry_weight >= 0", name="ck_waste_collections_dry_weight"
        ),
        CheckConstraint(
            "hazardous_weight IS NULL OR hazardous_weight >= 0",
            name="ck_waste_collections_hazardous_weight",
        ),
        Index("ix_waste_collections_eligibility", "transporter_id", "status", "recycler_id"),
    )

    def to_entity(self) -> Collection:
        """Convert the row into a domain Collection."""
        return Collection(
            id=self.id,
            transporter_id=self.transporter_id,
            status=CollectionStatus(self.status),
            weight=self.weight,
            waste_types={
                WasteCategory.WET.value: self.wet_weight,
                WasteCategory.DRY.value: self.dry_weight,
                WasteCategory.HAZARDOUS.value: self.hazardous_weight,
            },
            recycler_id=self.recycler_id,
            claim_batch_id=self.claim_batch_id,
            created_at=self.created_at,
            claimed_at=self.claimed_at,
        )

    def __repr__(self) -> str:
        return (
            f"<Collection(id={self.id}, transporter_id={self.transporter_id}, "
            f"status={self.status}, recycler_id={self.recycler_id})>"
        )
