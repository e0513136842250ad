"""API Schemas for request/response validation."""

from wastelink.infrastructure.api.schemas.recycler_schemas import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RecyclerResponse,
    RegisterRequest,
    UpdateProfileRequest,
)
from wastelink.infrastructure.api.schemas.scan_schemas import (
    CategoricalWeights,
    CollectionListResponse,
    CollectionResponse,
    ScanRequest,
    ScanResponse,
)

__all__ = [
    "AuthResponse",
    "CategoricalWeights",
    "CollectionListResponse",
    "CollectionResponse",
    "LoginRequest",
    "MessageResponse",
    "ProfileResponse",
    "RecyclerResponse",
    "RegisterRequest",
    "ScanRequest",
    "ScanResponse",
    "UpdateProfileRequest",
]
