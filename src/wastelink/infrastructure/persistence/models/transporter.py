"""SQLAlchemy model for the transporters table."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wastelink.infrastructure.persistence.database import Base


class TransporterModel(Base):
    """SQLAlchemy model for the transporters table.

    Attributes:
        id: Primary key (UUID string), encoded in the transporter's QR code.
        name: Display name.
        email: Contact email address (unique).
        vehicle_number: Registration of the pickup vehicle.
        created_at: Timestamp when the transporter was registered.
    """

    __tablename__ = "transporters"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Transporter ID (UUID)",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    vehicle_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    collections: Mapped[list["CollectionModel"]] = relationship(  # noqa: F821
        "CollectionModel",
        back_populates="transporter",
    )

    def __repr__(self) -> str:
        return f"<Transporter(id={self.id}, name={self.name})>"
