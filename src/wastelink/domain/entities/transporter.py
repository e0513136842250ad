"""Transporter entity.

Transporters physically perform pickups and are identified to recyclers by
a QR code encoding their ID.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Transporter:
    """Transporter entity.

    Attributes:
        id: Unique identifier (UUID string), encoded in the transporter's QR code.
        name: Display name.
        email: Contact email address.
        vehicle_number: Registration of the vehicle used for pickups.
        created_at: Timestamp when the transporter was registered.
    """

    id: str
    name: str
    email: str
    vehicle_number: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate transporter data after initialization."""
        if not self.id:
            raise ValueError("Transporter ID is required")
        if not self.name:
            raise ValueError("Transporter name is required")
