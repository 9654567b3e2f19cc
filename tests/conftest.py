"""
Pytest configuration and fixtures.
"""
import itertools

import pytest

from internal.domain.catalog import Category, Feature, FeatureOption, Size
from internal.usecase.catalog_store import CatalogStore
from internal.usecase.estimator_service import EstimatorService
from internal.usecase.price_table import PriceTable


@pytest.fixture
def id_factory():
    """Deterministic id factory: ``<prefix>-1``, ``<prefix>-2``, ..."""
    counter = itertools.count(1)
    return lambda prefix: f"{prefix}-{next(counter)}"


@pytest.fixture
def sofa_category():
    """Sofas: seats (2 options), material (3 options), two sizes."""
    return Category(
        id="sofas",
        name="Sofas",
        icon_name="Sofa",
        image_url="A",
        image_hint="living room sofa",
        features=[
            Feature(
                id="seats",
                name="Number of Seats",
                options=[
                    FeatureOption(id="seats-2", label="2-Seater"),
                    FeatureOption(id="seats-3", label="3-Seater"),
                ],
            ),
            Feature(
                id="material",
                name="Upholstery Material",
                options=[
                    FeatureOption(id="fabric", label="Fabric"),
                    FeatureOption(id="leather", label="Leather"),
                    FeatureOption(id="velvet", label="Velvet"),
                ],
            ),
        ],
        sizes=[
            Size(id="small", label="Small (50-69 inches)"),
            Size(id="large", label="Large (86+ inches)"),
        ],
    )


@pytest.fixture
def stool_category():
    """Stools: no features, one size."""
    return Category(
        id="stools",
        name="Stools",
        image_url="S",
        image_hint="bar stool",
        sizes=[Size(id="std", label="Standard")],
    )


@pytest.fixture
def price_table():
    """Empty price table."""
    return PriceTable()


@pytest.fixture
def store(price_table, sofa_category, stool_category, id_factory):
    """Catalog store holding sofas and stools."""
    return CatalogStore(
        price_table,
        [sofa_category, stool_category],
        id_factory=id_factory,
    )


@pytest.fixture
def service(store):
    """Estimator service over the sample store."""
    return EstimatorService(store)


@pytest.fixture
def sofa_selection():
    """Complete selection for a small fabric 2-seater."""
    return {"seats": "seats-2", "material": "fabric"}
