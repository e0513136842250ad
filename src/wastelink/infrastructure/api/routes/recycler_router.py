"""Recycler API routes.

Account management for recycling facilities and the QR scan endpoint that
claims a transporter's collected waste.
"""

import uuid

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from wastelink.core.config import get_settings
from wastelink.core.logging import get_logger
from wastelink.domain.entities import Collection, WasteCategory
from wastelink.domain.services import (
    ClaimCoordinator,
    CollectionStoreError,
    InvalidInputError,
    TransporterNotFoundError,
)
from wastelink.infrastructure.api.dependencies import (
    RECYCLER_ROLE,
    AuthenticatedRecycler,
)
from wastelink.infrastructure.api.schemas import (
    AuthResponse,
    CategoricalWeights,
    CollectionListResponse,
    CollectionResponse,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RecyclerResponse,
    RegisterRequest,
    ScanRequest,
    ScanResponse,
    UpdateProfileRequest,
)
from wastelink.infrastructure.auth import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    jwt_service,
    verify_password,
)
from wastelink.infrastructure.persistence.database import get_db_session
from wastelink.infrastructure.persistence.models import RecyclerModel
from wastelink.infrastructure.persistence.repositories import (
    CollectionRepository,
    RecyclerRepository,
    TransporterRepository,
)

logger = get_logger(__name__)

router = APIRouter()


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


def _issue_session(response: Response, recycler: RecyclerModel) -> str:
    """Create an access token and set it as the session cookie."""
    settings = get_settings()
    token = jwt_service.create_access_token(
        subject_id=recycler.id,
        role=RECYCLER_ROLE,
        email=recycler.email,
    )
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=jwt_service.get_expires_in(),
        httponly=True,
        secure=settings.session_cookie_secure or settings.is_production,
        samesite=settings.session_cookie_samesite,
    )
    return token


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    responses={
        400: {"description": "Validation error"},
        409: {"description": "Conflict - email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    response: Response,
    session: AsyncSession = Depends(get_db_session),
) -> AuthResponse | JSONResponse:
    """Register a recycling facility and start a session."""
    recycler_repo = RecyclerRepository(session)

    if await recycler_repo.email_exists(request.email):
        logger.info("Registration failed: email exists", email=request.email)
        return _error(
            status.HTTP_409_CONFLICT,
            "Conflict",
            "Recycler with this email already exists",
        )

    recycler = RecyclerModel(
        id=str(uuid.uuid4()),
        name=request.name,
        email=request.email,
        password_hash=hash_password(request.password),
        address=request.address,
        city=request.city,
        state=request.state,
        zip_code=request.zip_code,
    )
    await recycler_repo.create(recycler)
    await session.commit()
    await session.refresh(recycler)

    token = _issue_session(response, recycler)
    logger.info("Recycler registered", recycler_id=recycler.id, email=recycler.email)

    return AuthResponse(
        message="Recycler registered successfully",
        token=token,
        recycler=RecyclerResponse.model_validate(recycler),
    )


@router.post(
    "/login",
    response_model=AuthResponse,
    responses={401: {"description": "Invalid credentials"}},
)
async def login(
    request: LoginRequest,
    response: Response,
    session: AsyncSession = Depends(get_db_session),
) -> AuthResponse | JSONResponse:
    """Authenticate a recycler and start a session.

    Unknown email and wrong password produce the same 401 response.
    """
    recycler = await RecyclerRepository(session).get_by_email(request.email)

    password_hash = recycler.password_hash if recycler else DUMMY_PASSWORD_HASH
    password_valid = verify_password(request.password, password_hash)

    if recycler is None or not password_valid:
        logger.info("Login failed: invalid credentials", email=request.email)
        return _error(
            status.HTTP_401_UNAUTHORIZED,
            "Authentication failed",
            "Invalid email or password",
        )

    token = _issue_session(response, recycler)
    logger.info("Recycler logged in", recycler_id=recycler.id)

    return AuthResponse(
        message="Login successful",
        token=token,
        recycler=RecyclerResponse.model_validate(recycler),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    """End the session by clearing the session cookie."""
    settings = get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure or settings.is_production,
        samesite=settings.session_cookie_samesite,
    )
    return MessageResponse(message="Logout successful")


@router.get("/check", response_model=RecyclerResponse)
async def check_recycler(
    current_recycler: AuthenticatedRecycler,
    session: AsyncSession = Depends(get_db_session),
) -> RecyclerResponse | JSONResponse:
    """Return the authenticated recycler."""
    recycler = await RecyclerRepository(session).get_by_id(current_recycler.id)
    if recycler is None:
        return _error(status.HTTP_404_NOT_FOUND, "Not found", "Recycler not found")
    return RecyclerResponse.model_validate(recycler)


@router.put(
    "/profile",
    response_model=ProfileResponse,
    responses={
        404: {"description": "Recycler not found"},
        409: {"description": "Conflict - email already registered"},
    },
)
async def update_profile(
    request: UpdateProfileRequest,
    current_recycler: AuthenticatedRecycler,
    session: AsyncSession = Depends(get_db_session),
) -> ProfileResponse | JSONResponse:
    """Update the recycler's profile. Only supplied fields change."""
    recycler_repo = RecyclerRepository(session)
    recycler = await recycler_repo.get_by_id(current_recycler.id)
    if recycler is None:
        logger.warning("Profile update failed: recycler not found", recycler_id=current_recycler.id)
        return _error(status.HTTP_404_NOT_FOUND, "Not found", "Recycler not found")

    updates = request.model_dump(exclude_none=True)
    if "email" in updates and await recycler_repo.email_exists(
        updates["email"], exclude_id=recycler.id
    ):
        return _error(
            status.HTTP_409_CONFLICT,
            "Conflict",
            "Recycler with this email already exists",
        )

    for field_name, value in updates.items():
        setattr(recycler, field_name, value)

    await session.commit()
    await session.refresh(recycler)

    logger.info(
        "Recycler profile updated",
        recycler_id=recycler.id,
        fields=sorted(updates),
    )
    return ProfileResponse(
        message="Profile updated successfully",
        recycler=RecyclerResponse.model_validate(recycler),
    )


@router.post(
    "/scan",
    response_model=ScanResponse,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Scanned QR code is invalid or empty"},
        404: {"description": "Transporter not found"},
        500: {"description": "Server error while processing the scan"},
    },
)
async def scan_qr_code(
    request: ScanRequest,
    current_recycler: AuthenticatedRecycler,
    session: AsyncSession = Depends(get_db_session),
) -> ScanResponse | JSONResponse:
    """Claim every collected, unclaimed collection of the scanned transporter.

    Flow:
    1. Validate the scanned transporter ID
    2. Resolve the transporter
    3. Select eligible collections and aggregate their weights
    4. Claim them with a single guarded update
    5. Commit and return the claim summary
    """
    coordinator = ClaimCoordinator(
        store=CollectionRepository(session),
        transporters=TransporterRepository(session),
    )

    try:
        summary = await coordinator.claim_collections(
            current_recycler.as_actor(),
            request.scanned_transporter_id,
        )
        if summary.claimed_count:
            await session.commit()
    except InvalidInputError as e:
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid input", e.message)
    except TransporterNotFoundError as e:
        return _error(status.HTTP_404_NOT_FOUND, "Not found", e.message)
    except (CollectionStoreError, SQLAlchemyError) as e:
        await session.rollback()
        logger.error(
            "QR scan processing failed",
            recycler_id=current_recycler.id,
            error=str(e),
        )
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            "Server error while processing the scan.",
        )

    if summary.claimed_count == 0:
        return ScanResponse(message=summary.message, claimed_count=0)

    return ScanResponse(
        message=summary.message,
        claimed_count=summary.claimed_count,
        estimated_total_weight=summary.estimated_total_weight,
        estimated_categorical_weights=CategoricalWeights(
            **summary.estimated_categorical_weights
        ),
    )


def _collection_response(collection: Collection) -> CollectionResponse:
    return CollectionResponse(
        id=collection.id,
        transporter_id=collection.transporter_id,
        status=collection.status.value,
        weight=collection.weight,
        waste_types=CategoricalWeights(
            **{category.value: collection.category_weight(category) for category in WasteCategory}
        ),
        created_at=collection.created_at,
        claimed_at=collection.claimed_at,
    )


@router.get("/collections", response_model=CollectionListResponse)
async def list_collections(
    current_recycler: AuthenticatedRecycler,
    session: AsyncSession = Depends(get_db_session),
) -> CollectionListResponse | JSONResponse:
    """Return the collections the authenticated recycler has claimed."""
    limit = get_settings().collection_history_limit
    try:
        collections = await CollectionRepository(session).list_for_recycler(
            current_recycler.id, limit=limit
        )
    except CollectionStoreError:
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            "Server error while fetching collections.",
        )

    items = [_collection_response(collection) for collection in collections]
    return CollectionListResponse(items=items, total=len(items))
