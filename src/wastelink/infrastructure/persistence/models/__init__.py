"""SQLAlchemy models for WasteLink tables.

All models inherit from the Base class defined in database.py and are
created on application startup in development mode.
"""

from wastelink.infrastructure.persistence.models.collection import CollectionModel
from wastelink.infrastructure.persistence.models.recycler import RecyclerModel
from wastelink.infrastructure.persistence.models.transporter import TransporterModel

__all__ = [
    "CollectionModel",
    "RecyclerModel",
    "TransporterModel",
]
