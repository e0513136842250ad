"""SQLAlchemy model for the recyclers table.

Recyclers are the recycling facilities that claim collected waste for processing.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from wastelink.infrastructure.persistence.database import Base


class RecyclerModel(Base):
    """SQLAlchemy model for the recyclers table.

    Attributes:
        id: Primary key (UUID string).
        name: Facility display name.
        email: Login email address (unique).
        password_hash: Argon2 password hash.
        address: Street address.
        city: City.
        state: State or region.
        zip_code: Postal code.
        created_at: Timestamp when the recycler registered.
        updated_at: Timestamp of the last profile change.
    """

    __tablename__ = "recyclers"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Recycler ID (UUID)",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Login email address",
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2)",
    )
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    collections: Mapped[list["CollectionModel"]] = relationship(  # noqa: F821
        "CollectionModel",
        back_populates="recycler",
    )

    def __repr__(self) -> str:
        return f"<Recycler(id={self.id}, email={self.email})>"
