"""
Use case package for the Furniture Estimator.

Contains the catalog store, price table, combination enumerator and
selection resolution.
"""
from .price_table import PriceTable
from .catalog_store import CatalogStore, ImageDefaults
from .combinations import CombinationEnumerator, feature_assignments
from .resolution import describe, resolve_image
from .estimator_service import EstimatorService

__all__ = [
    "PriceTable",
    "CatalogStore",
    "ImageDefaults",
    "CombinationEnumerator",
    "feature_assignments",
    "describe",
    "resolve_image",
    "EstimatorService",
]
