"""Pydantic schemas for the QR scan claim endpoint and collection history."""

from datetime import datetime

from pydantic import BaseModel, Field

from wastelink.infrastructure.api.schemas.recycler_schemas import CAMEL_CASE_CONFIG


class ScanRequest(BaseModel):
    """Request body for claiming a transporter's collections.

    The identifier is optional at the schema level so that a missing or
    empty value is reported with the same 400 response.
    """

    model_config = CAMEL_CASE_CONFIG

    scanned_transporter_id: str | None = Field(
        None, description="Transporter ID decoded from the scanned QR code"
    )


class CategoricalWeights(BaseModel):
    """Weight per waste category."""

    wet: float = 0.0
    dry: float = 0.0
    hazardous: float = 0.0


class ScanResponse(BaseModel):
    """Claim summary. Weight fields are omitted when nothing was claimed."""

    model_config = CAMEL_CASE_CONFIG

    message: str
    claimed_count: int
    estimated_total_weight: float | None = None
    estimated_categorical_weights: CategoricalWeights | None = None


class CollectionResponse(BaseModel):
    """A collection in the recycler's history."""

    model_config = CAMEL_CASE_CONFIG

    id: str
    transporter_id: str
    status: str
    weight: float | None = None
    waste_types: CategoricalWeights
    created_at: datetime | None = None
    claimed_at: datetime | None = None


class CollectionListResponse(BaseModel):
    """Collection history of the authenticated recycler."""

    items: list[CollectionResponse]
    total: int
