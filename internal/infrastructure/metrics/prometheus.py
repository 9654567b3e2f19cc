"""
Prometheus Metrics for the Furniture Estimator.

HTTP request metrics plus gauges describing the catalog and price grid.
"""

from prometheus_client import Counter, Gauge, Histogram

# API
HTTP_REQUESTS_TOTAL = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)

HTTP_REQUEST_DURATION = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5]
)

# Catalog
CATEGORIES_TOTAL = Gauge(
    'catalog_categories_total',
    'Number of categories in the catalog'
)

PRICE_ENTRIES_TOTAL = Gauge(
    'price_entries_total',
    'Number of price entries in the price table'
)

COMBINATIONS_TOTAL = Gauge(
    'price_combinations_total',
    'Combinations in the last rendered price grid',
    ['priced']  # true, false
)

PRICE_UPSERTS = Counter(
    'price_upserts_total',
    'Price save attempts',
    ['status']  # success, invalid, not_found
)


def record_catalog_size(categories: int, price_entries: int) -> None:
    """Refresh the catalog size gauges."""
    CATEGORIES_TOTAL.set(categories)
    PRICE_ENTRIES_TOTAL.set(price_entries)


def record_combinations(priced: int, unpriced: int) -> None:
    """Refresh the price grid gauges."""
    COMBINATIONS_TOTAL.labels(priced="true").set(priced)
    COMBINATIONS_TOTAL.labels(priced="false").set(unpriced)
