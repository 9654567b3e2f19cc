"""
Domain package for the Furniture Estimator.

Contains catalog entities, pricing value objects, and domain errors.
"""
from .catalog import (
    Category,
    Feature,
    FeatureOption,
    SelectionType,
    Size,
    derive_image_hint,
)
from .pricing import (
    EstimationRecord,
    PriceCombination,
    PriceEntry,
    PriceRange,
    ResolvedImage,
    UserSelection,
    canonical_feature_value,
    canonicalize_selections,
)
from .errors import (
    DomainError,
    DomainValidationError,
    NotFoundError,
    CategoryNotFoundError,
    FeatureNotFoundError,
    OptionNotFoundError,
    SizeNotFoundError,
    InvalidPriceRangeError,
    IncompleteSelectionError,
    PriceEntryNotFoundError,
)

__all__ = [
    "Category",
    "Feature",
    "FeatureOption",
    "SelectionType",
    "Size",
    "derive_image_hint",
    # Pricing
    "EstimationRecord",
    "PriceCombination",
    "PriceEntry",
    "PriceRange",
    "ResolvedImage",
    "UserSelection",
    "canonical_feature_value",
    "canonicalize_selections",
    # Errors
    "DomainError",
    "DomainValidationError",
    "NotFoundError",
    "CategoryNotFoundError",
    "FeatureNotFoundError",
    "OptionNotFoundError",
    "SizeNotFoundError",
    "InvalidPriceRangeError",
    "IncompleteSelectionError",
    "PriceEntryNotFoundError",
]
