"""
Metrics package.
"""
from .prometheus import (
    HTTP_REQUESTS_TOTAL,
    HTTP_REQUEST_DURATION,
    CATEGORIES_TOTAL,
    PRICE_ENTRIES_TOTAL,
    COMBINATIONS_TOTAL,
    PRICE_UPSERTS,
    record_catalog_size,
    record_combinations,
)

__all__ = [
    "HTTP_REQUESTS_TOTAL",
    "HTTP_REQUEST_DURATION",
    "CATEGORIES_TOTAL",
    "PRICE_ENTRIES_TOTAL",
    "COMBINATIONS_TOTAL",
    "PRICE_UPSERTS",
    "record_catalog_size",
    "record_combinations",
]
