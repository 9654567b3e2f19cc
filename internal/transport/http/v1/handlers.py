"""
FastAPI HTTP Handlers for the Furniture Estimator API v1.

Implements REST endpoints for catalog administration, pricing and estimates.
"""

from typing import NoReturn, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from internal.domain.catalog import Category, Feature, FeatureOption, Size
from internal.domain.errors import (
    DomainError,
    DomainValidationError,
    InvalidPriceRangeError,
    NotFoundError,
)
from internal.domain.pricing import PriceCombination, PriceEntry, UserSelection
from internal.infrastructure.metrics import (
    PRICE_UPSERTS,
    record_catalog_size,
    record_combinations,
)
from internal.transport.http.dto import (
    CategoriesResponse,
    CategoryCreateRequest,
    CategoryDTO,
    CategoryUpdateRequest,
    ChoiceRequest,
    CombinationDTO,
    CombinationImageRequest,
    CombinationsResponse,
    DeleteResponse,
    ErrorResponse,
    EstimateRequest,
    EstimateResponse,
    FeatureCreateRequest,
    FeatureDTO,
    FeatureUpdateRequest,
    OptionDTO,
    PriceEntriesResponse,
    PriceEntryDTO,
    PriceLookupResponse,
    PriceUpsertRequest,
    SelectionDTO,
    SizeDTO,
)
from internal.usecase.estimator_service import EstimatorService
from pkg.logger.logger import get_logger, get_request_id

logger = get_logger(__name__)


router = APIRouter(prefix="/api/v1", tags=["estimator"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Entity not found"}}
INVALID = {400: {"model": ErrorResponse, "description": "Validation error"}}


# Dependency injection container (simplified)
class Dependencies:
    """Container for handler dependencies."""

    service: Optional[EstimatorService] = None


_deps = Dependencies()


def set_dependencies(service: Optional[EstimatorService]) -> None:
    """
    Set handler dependencies.

    Called during application startup.
    """
    _deps.service = service


def get_service() -> EstimatorService:
    """Get EstimatorService instance."""
    if _deps.service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized",
        )
    return _deps.service


def _raise_http(error: DomainError) -> NoReturn:
    """Translate a domain error into an HTTPException."""
    if isinstance(error, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, DomainValidationError):
        code = status.HTTP_400_BAD_REQUEST
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    raise HTTPException(
        status_code=code,
        detail=ErrorResponse(
            detail=error.message,
            code=type(error).__name__,
            request_id=get_request_id(),
        ).model_dump(),
    )


def _category_dto(category: Category) -> CategoryDTO:
    return CategoryDTO.model_validate(category.to_dict())


def _entry_dto(entry: PriceEntry) -> PriceEntryDTO:
    return PriceEntryDTO.model_validate(entry.to_dict())


def _combination_dto(row: PriceCombination) -> CombinationDTO:
    return CombinationDTO.model_validate(row.to_dict())


def _selection(dto: SelectionDTO) -> UserSelection:
    return UserSelection(
        category_id=dto.category_id,
        feature_selections=dict(dto.feature_selections),
        size_id=dto.size_id,
    )


# Categories
@router.get("/categories", response_model=CategoriesResponse)
async def list_categories(
    service: EstimatorService = Depends(get_service),
) -> CategoriesResponse:
    """List every category with its features and sizes."""
    return CategoriesResponse(data=[_category_dto(c) for c in service.categories()])


@router.post(
    "/categories",
    response_model=CategoryDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    request: CategoryCreateRequest,
    service: EstimatorService = Depends(get_service),
) -> CategoryDTO:
    """Create an empty category."""
    category = service.add_category(
        name=request.name,
        icon_name=request.icon_name,
        image_url=request.image_url,
        image_hint=request.image_hint,
    )
    return _category_dto(category)


@router.get("/categories/{category_id}", response_model=CategoryDTO, responses=NOT_FOUND)
async def get_category(
    category_id: str,
    service: EstimatorService = Depends(get_service),
) -> CategoryDTO:
    """Get one category."""
    try:
        return _category_dto(service.get_category(category_id))
    except DomainError as e:
        _raise_http(e)


@router.put("/categories/{category_id}", response_model=CategoryDTO, responses=NOT_FOUND)
async def update_category(
    category_id: str,
    request: CategoryUpdateRequest,
    service: EstimatorService = Depends(get_service),
) -> CategoryDTO:
    """
    Replace a category wholesale.

    Price entries referencing features, options or sizes dropped by the new
    record are removed.
    """
    category = Category.from_dict({"id": category_id, **request.model_dump()})
    try:
        return _category_dto(service.update_category(category))
    except DomainError as e:
        _raise_http(e)


@router.delete("/categories/{category_id}", response_model=DeleteResponse)
async def delete_category(
    category_id: str,
    service: EstimatorService = Depends(get_service),
) -> DeleteResponse:
    """Delete a category and its price entries."""
    return DeleteResponse(deleted=service.delete_category(category_id))


# Features
@router.post(
    "/categories/{category_id}/features",
    response_model=FeatureDTO,
    status_code=status.HTTP_201_CREATED,
    responses=NOT_FOUND,
)
async def create_feature(
    category_id: str,
    request: FeatureCreateRequest,
    service: EstimatorService = Depends(get_service),
) -> FeatureDTO:
    """Append a feature without options to a category."""
    try:
        feature = service.add_feature(category_id, request.name, request.selection_type)
    except DomainError as e:
        _raise_http(e)
    return FeatureDTO.model_validate(feature.to_dict())


@router.put(
    "/categories/{category_id}/features/{feature_id}",
    response_model=FeatureDTO,
    responses=NOT_FOUND,
)
async def update_feature(
    category_id: str,
    feature_id: str,
    request: FeatureUpdateRequest,
    service: EstimatorService = Depends(get_service),
) -> FeatureDTO:
    """Replace a feature wholesale."""
    feature = Feature.from_dict({"id": feature_id, **request.model_dump()})
    try:
        feature = service.update_feature(category_id, feature)
    except DomainError as e:
        _raise_http(e)
    return FeatureDTO.model_validate(feature.to_dict())


@router.delete(
    "/categories/{category_id}/features/{feature_id}",
    response_model=DeleteResponse,
)
async def delete_feature(
    category_id: str,
    feature_id: str,
    service: EstimatorService = Depends(get_service),
) -> DeleteResponse:
    """Delete a feature and every price entry that selected it."""
    return DeleteResponse(deleted=service.delete_feature(category_id, feature_id))


# Options
@router.post(
    "/categories/{category_id}/features/{feature_id}/options",
    response_model=OptionDTO,
    status_code=status.HTTP_201_CREATED,
    responses=NOT_FOUND,
)
async def create_option(
    category_id: str,
    feature_id: str,
    request: ChoiceRequest,
    service: EstimatorService = Depends(get_service),
) -> OptionDTO:
    """Append an option to a feature."""
    try:
        option = service.add_option(category_id, feature_id, **request.model_dump())
    except DomainError as e:
        _raise_http(e)
    return OptionDTO.model_validate(option.to_dict())


@router.put(
    "/categories/{category_id}/features/{feature_id}/options/{option_id}",
    response_model=OptionDTO,
    responses=NOT_FOUND,
)
async def update_option(
    category_id: str,
    feature_id: str,
    option_id: str,
    request: ChoiceRequest,
    service: EstimatorService = Depends(get_service),
) -> OptionDTO:
    """Replace an option."""
    option = FeatureOption(id=option_id, **request.model_dump())
    try:
        option = service.update_option(category_id, feature_id, option)
    except DomainError as e:
        _raise_http(e)
    return OptionDTO.model_validate(option.to_dict())


@router.delete(
    "/categories/{category_id}/features/{feature_id}/options/{option_id}",
    response_model=DeleteResponse,
)
async def delete_option(
    category_id: str,
    feature_id: str,
    option_id: str,
    service: EstimatorService = Depends(get_service),
) -> DeleteResponse:
    """Delete an option and every price entry that selected it."""
    return DeleteResponse(deleted=service.delete_option(category_id, feature_id, option_id))


# Sizes
@router.post(
    "/categories/{category_id}/sizes",
    response_model=SizeDTO,
    status_code=status.HTTP_201_CREATED,
    responses=NOT_FOUND,
)
async def create_size(
    category_id: str,
    request: ChoiceRequest,
    service: EstimatorService = Depends(get_service),
) -> SizeDTO:
    """Append a size to a category."""
    try:
        size = service.add_size(category_id, **request.model_dump())
    except DomainError as e:
        _raise_http(e)
    return SizeDTO.model_validate(size.to_dict())


@router.put(
    "/categories/{category_id}/sizes/{size_id}",
    response_model=SizeDTO,
    responses=NOT_FOUND,
)
async def update_size(
    category_id: str,
    size_id: str,
    request: ChoiceRequest,
    service: EstimatorService = Depends(get_service),
) -> SizeDTO:
    """Replace a size."""
    size = Size(id=size_id, **request.model_dump())
    try:
        size = service.update_size(category_id, size)
    except DomainError as e:
        _raise_http(e)
    return SizeDTO.model_validate(size.to_dict())


@router.delete("/categories/{category_id}/sizes/{size_id}", response_model=DeleteResponse)
async def delete_size(
    category_id: str,
    size_id: str,
    service: EstimatorService = Depends(get_service),
) -> DeleteResponse:
    """Delete a size and every price entry for it."""
    return DeleteResponse(deleted=service.delete_size(category_id, size_id))


# Prices
@router.get("/prices", response_model=PriceEntriesResponse)
async def list_prices(
    category_id: Optional[str] = Query(None, description="Filter by category"),
    service: EstimatorService = Depends(get_service),
) -> PriceEntriesResponse:
    """List stored price entries."""
    return PriceEntriesResponse(data=[_entry_dto(e) for e in service.list_prices(category_id)])


@router.post("/prices/lookup", response_model=PriceLookupResponse)
async def lookup_price(
    request: SelectionDTO,
    service: EstimatorService = Depends(get_service),
) -> PriceLookupResponse:
    """
    Exact-match price lookup.

    Partial selections are never priced.
    """
    entry = service.lookup_price(
        request.category_id,
        dict(request.feature_selections),
        request.size_id,
    )
    return PriceLookupResponse(
        priced=entry is not None,
        entry=_entry_dto(entry) if entry else None,
    )


@router.put("/prices", response_model=PriceEntryDTO, responses={**NOT_FOUND, **INVALID})
async def upsert_price(
    request: PriceUpsertRequest,
    service: EstimatorService = Depends(get_service),
) -> PriceEntryDTO:
    """Insert or update the price of a combination."""
    logger.info(
        "Saving price",
        category_id=request.category_id,
        size_id=request.size_id,
    )
    try:
        entry = service.save_price(
            request.category_id,
            dict(request.feature_selections),
            request.size_id,
            request.price_range.min,
            request.price_range.max,
        )
    except InvalidPriceRangeError as e:
        PRICE_UPSERTS.labels(status="invalid").inc()
        _raise_http(e)
    except NotFoundError as e:
        PRICE_UPSERTS.labels(status="not_found").inc()
        _raise_http(e)
    except DomainError as e:
        PRICE_UPSERTS.labels(status="invalid").inc()
        _raise_http(e)

    PRICE_UPSERTS.labels(status="success").inc()
    return _entry_dto(entry)


@router.put("/prices/image", response_model=PriceEntryDTO, responses=NOT_FOUND)
async def set_combination_image(
    request: CombinationImageRequest,
    service: EstimatorService = Depends(get_service),
) -> PriceEntryDTO:
    """Set or clear the image of a priced combination."""
    try:
        entry = service.set_combination_image(
            request.category_id,
            dict(request.feature_selections),
            request.size_id,
            request.image_url,
            request.image_hint,
        )
    except DomainError as e:
        _raise_http(e)
    return _entry_dto(entry)


@router.get("/combinations", response_model=CombinationsResponse)
async def list_combinations(
    priced: Optional[bool] = Query(None, description="Only priced (true) or unpriced (false) rows"),
    service: EstimatorService = Depends(get_service),
) -> CombinationsResponse:
    """Administrative price grid over the whole catalog."""
    rows = service.combinations()
    priced_count = sum(1 for row in rows if row.is_priced)
    record_combinations(priced_count, len(rows) - priced_count)
    record_catalog_size(len(service.categories()), len(service.list_prices()))

    if priced is not None:
        rows = [row for row in rows if row.is_priced == priced]
    return CombinationsResponse(
        data=[_combination_dto(row) for row in rows],
        total=len(rows),
        priced=sum(1 for row in rows if row.is_priced),
    )


# Estimates
@router.post("/estimates", response_model=EstimateResponse)
async def create_estimate(
    request: EstimateRequest,
    service: EstimatorService = Depends(get_service),
) -> EstimateResponse:
    """
    Describe, price and picture a selection.

    The returned snapshot is not stored; history and favorites belong to
    the client.
    """
    selection = _selection(request.selection)
    record = service.estimate(selection, name=request.name)
    return EstimateResponse(
        id=record.id,
        selections=request.selection,
        description=record.description,
        price_range=record.price_range.to_dict() if record.price_range else None,
        timestamp=record.timestamp,
        name=record.name,
        image_url=record.image.url,
        image_hint=record.image.hint,
    )


@router.get("/health")
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns:
        Health status.
    """
    return {"status": "healthy", "service": "furniture-estimator"}


@router.get("/metrics")
async def metrics():
    """
    Prometheus metrics endpoint.

    Returns:
        Prometheus metrics in text format.
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )
