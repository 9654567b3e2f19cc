"""
Data Transfer Objects for the Furniture Estimator API.

Contains Pydantic models for request/response validation. Price bounds are
not constrained here; range rules live in the domain so that every caller
gets the same InvalidPriceRangeError.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from internal.domain.catalog import SelectionType

SelectionValueDTO = Union[str, List[str]]


# Catalog DTOs
class OptionDTO(BaseModel):
    """Feature option."""

    id: str = Field(..., description="Option ID")
    label: str = Field(..., min_length=1, description="Option label")
    icon_name: Optional[str] = Field(None, description="Icon reference")
    image_url: Optional[str] = Field(None, description="Image URL or data URI")
    image_hint: Optional[str] = Field(None, description="Image search hint")

    class Config:
        json_schema_extra = {
            "example": {
                "id": "sofas-feat-material-opt-leather",
                "label": "Leather",
                "icon_name": "Option",
                "image_url": "https://placehold.co/50x50.png",
                "image_hint": "leather texture",
            }
        }


class FeatureDTO(BaseModel):
    """Category feature with its options."""

    id: str = Field(..., description="Feature ID")
    name: str = Field(..., min_length=1, description="Feature name")
    selection_type: SelectionType = Field(SelectionType.SINGLE, description="single or multiple")
    options: List[OptionDTO] = Field(default_factory=list, description="Options in order")


class SizeDTO(BaseModel):
    """Category size."""

    id: str = Field(..., description="Size ID")
    label: str = Field(..., min_length=1, description="Size label")
    icon_name: Optional[str] = Field(None, description="Icon reference")
    image_url: Optional[str] = Field(None, description="Image URL or data URI")
    image_hint: Optional[str] = Field(None, description="Image search hint")


class CategoryDTO(BaseModel):
    """Category with nested features and sizes."""

    id: str = Field(..., description="Category ID")
    name: str = Field(..., description="Category name")
    icon_name: str = Field("", description="Icon reference")
    image_url: str = Field("", description="Image URL or data URI")
    image_hint: str = Field("", description="Image search hint")
    features: List[FeatureDTO] = Field(default_factory=list, description="Features in order")
    sizes: List[SizeDTO] = Field(default_factory=list, description="Sizes in order")


class CategoriesResponse(BaseModel):
    """Response with all categories."""

    data: List[CategoryDTO] = Field(..., description="Categories in stored order")


class CategoryCreateRequest(BaseModel):
    """Request body for creating a category."""

    name: str = Field(..., min_length=1, max_length=200, description="Category name")
    icon_name: str = Field("", description="Icon reference")
    image_url: str = Field("", description="Image URL; placeholder when blank")
    image_hint: str = Field("", description="Image hint; derived from name when blank")

    class Config:
        json_schema_extra = {
            "example": {"name": "Armchairs", "icon_name": "Armchair"}
        }


class CategoryUpdateRequest(BaseModel):
    """Full replacement of a category record."""

    name: str = Field(..., min_length=1, max_length=200)
    icon_name: str = ""
    image_url: str = ""
    image_hint: str = ""
    features: List[FeatureDTO] = Field(default_factory=list)
    sizes: List[SizeDTO] = Field(default_factory=list)


class FeatureCreateRequest(BaseModel):
    """Request body for creating a feature."""

    name: str = Field(..., min_length=1, max_length=200)
    selection_type: SelectionType = SelectionType.SINGLE


class FeatureUpdateRequest(BaseModel):
    """Full replacement of a feature record."""

    name: str = Field(..., min_length=1, max_length=200)
    selection_type: SelectionType = SelectionType.SINGLE
    options: List[OptionDTO] = Field(default_factory=list)


class ChoiceRequest(BaseModel):
    """Request body for creating or replacing an option or a size."""

    label: str = Field(..., min_length=1, max_length=200)
    icon_name: Optional[str] = None
    image_url: Optional[str] = None
    image_hint: Optional[str] = None


class DeleteResponse(BaseModel):
    """Result of a delete operation."""

    deleted: bool = Field(..., description="Whether anything was removed")


# Pricing DTOs
class PriceRangeDTO(BaseModel):
    """Price range."""

    min: float = Field(..., description="Lower bound")
    max: float = Field(..., description="Upper bound")

    class Config:
        json_schema_extra = {"example": {"min": 300, "max": 700}}


class SelectionDTO(BaseModel):
    """User selection, possibly partial."""

    category_id: Optional[str] = Field(None, description="Selected category")
    feature_selections: Dict[str, SelectionValueDTO] = Field(
        default_factory=dict,
        description="Feature ID to option ID (list for multi-select features)",
    )
    size_id: Optional[str] = Field(None, description="Selected size")

    class Config:
        json_schema_extra = {
            "example": {
                "category_id": "sofas",
                "feature_selections": {
                    "sofas-feat-seats": "sofas-feat-seats-opt-2",
                    "sofas-feat-material": "sofas-feat-material-opt-fabric",
                    "sofas-feat-style": ["sofas-feat-style-opt-modern"],
                },
                "size_id": "sofas-size-small",
            }
        }


class CombinationKeyDTO(BaseModel):
    """Full key of a priced combination."""

    category_id: str
    feature_selections: Dict[str, SelectionValueDTO] = Field(default_factory=dict)
    size_id: str


class PriceUpsertRequest(CombinationKeyDTO):
    """Request body for saving a combination price."""

    price_range: PriceRangeDTO


class CombinationImageRequest(CombinationKeyDTO):
    """Request body for setting (or clearing) a combination image."""

    image_url: Optional[str] = Field(None, description="Empty or null clears the override")
    image_hint: Optional[str] = None


class PriceEntryDTO(BaseModel):
    """Stored price entry."""

    category_id: str
    feature_selections: Dict[str, str]
    size_id: str
    price_range: PriceRangeDTO
    override_image_url: Optional[str] = None
    override_image_hint: Optional[str] = None


class PriceEntriesResponse(BaseModel):
    """Response with price entries."""

    data: List[PriceEntryDTO]


class PriceLookupResponse(BaseModel):
    """Result of an exact-match price lookup."""

    priced: bool = Field(..., description="Whether the combination has a price")
    entry: Optional[PriceEntryDTO] = None


class CombinationDTO(BaseModel):
    """Row of the administrative price grid."""

    category_id: str
    category_name: str
    feature_selections: Dict[str, str]
    feature_description: str
    size_id: str
    size_label: str
    price_range: PriceRangeDTO
    description: str
    is_priced: bool
    image_url: Optional[str] = None
    image_hint: Optional[str] = None
    override_image_url: Optional[str] = None
    override_image_hint: Optional[str] = None


class CombinationsResponse(BaseModel):
    """Administrative price grid."""

    data: List[CombinationDTO]
    total: int = Field(..., description="Number of combinations")
    priced: int = Field(..., description="Number of priced combinations")


# Estimation DTOs
class EstimateRequest(BaseModel):
    """Request body for producing an estimate."""

    selection: SelectionDTO
    name: Optional[str] = Field(None, max_length=200, description="Optional record name")


class EstimateResponse(BaseModel):
    """Estimation snapshot with the resolved image."""

    id: str
    selections: SelectionDTO
    description: str
    price_range: Optional[PriceRangeDTO] = None
    timestamp: datetime
    name: Optional[str] = None
    image_url: Optional[str] = None
    image_hint: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error response body."""

    detail: str
    code: str
    request_id: Optional[str] = None
