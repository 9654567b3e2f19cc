"""
Seed catalog.

Demo furniture catalog loaded at startup when ``seed_catalog`` is enabled.
"""
from internal.domain.catalog import Category, Feature, FeatureOption, SelectionType, Size
from internal.usecase.estimator_service import EstimatorService
from pkg.logger.logger import get_logger

logger = get_logger(__name__)

_THUMB = "https://placehold.co/100x75.png"
_SWATCH = "https://placehold.co/50x50.png"
_SIZE = "https://placehold.co/80x60.png"


def _option(feature_id: str, key: str, label: str, icon: str, image: str, hint: str) -> FeatureOption:
    return FeatureOption(
        id=f"{feature_id}-opt-{key}",
        label=label,
        icon_name=icon,
        image_url=image,
        image_hint=hint,
    )


def seed_categories() -> list[Category]:
    """Build the demo categories (fresh objects on every call)."""
    sofas = Category(
        id="sofas",
        name="Sofas",
        icon_name="Sofa",
        image_url="https://placehold.co/400x300.png",
        image_hint="living room sofa",
        features=[
            Feature(
                id="sofas-feat-seats",
                name="Number of Seats",
                options=[
                    _option("sofas-feat-seats", "2", "2-Seater", "Users", _THUMB, "small sofa"),
                    _option("sofas-feat-seats", "3", "3-Seater", "Users", _THUMB, "medium sofa"),
                    _option("sofas-feat-seats", "sectional", "Sectional", "GalleryVerticalEnd", _THUMB, "large sofa"),
                ],
            ),
            Feature(
                id="sofas-feat-material",
                name="Upholstery Material",
                options=[
                    _option("sofas-feat-material", "fabric", "Fabric", "GalleryThumbnails", _SWATCH, "fabric texture"),
                    _option("sofas-feat-material", "leather", "Leather", "Option", _SWATCH, "leather texture"),
                    _option("sofas-feat-material", "velvet", "Velvet", "Sparkles", _SWATCH, "velvet texture"),
                ],
            ),
            Feature(
                id="sofas-feat-style",
                name="Style",
                selection_type=SelectionType.MULTIPLE,
                options=[
                    _option("sofas-feat-style", "modern", "Modern", "Zap", _THUMB, "modern sofa"),
                    _option("sofas-feat-style", "traditional", "Traditional", "Grape", _THUMB, "classic sofa"),
                    _option("sofas-feat-style", "midcentury", "Mid-Century", "Sun", _THUMB, "retro sofa"),
                ],
            ),
        ],
        sizes=[
            Size("sofas-size-small", "Small (50-69 inches)", "Minimize2", _SIZE, "compact furniture"),
            Size("sofas-size-medium", "Medium (70-85 inches)", "AppWindow", _SIZE, "standard furniture"),
            Size("sofas-size-large", "Large (86+ inches)", "Maximize2", _SIZE, "spacious furniture"),
        ],
    )

    tables = Category(
        id="tables",
        name="Dining Tables",
        icon_name="Table",
        image_url="https://placehold.co/400x300.png",
        image_hint="dining table",
        features=[
            Feature(
                id="tables-feat-shape",
                name="Shape",
                options=[
                    _option("tables-feat-shape", "rect", "Rectangular", "RectangleHorizontal", _THUMB, "rectangular table"),
                    _option("tables-feat-shape", "round", "Round", "Circle", _THUMB, "round table"),
                    _option("tables-feat-shape", "square", "Square", "Square", _THUMB, "square table"),
                ],
            ),
            Feature(
                id="tables-feat-material",
                name="Material",
                options=[
                    _option("tables-feat-material", "wood", "Wood", "Trees", _SWATCH, "wood grain"),
                    _option("tables-feat-material", "glass", "Glass", "GlassWater", _SWATCH, "glass surface"),
                    _option("tables-feat-material", "metal", "Metal", "Wrench", _SWATCH, "metal finish"),
                ],
            ),
        ],
        sizes=[
            Size("tables-size-2-4", "Seats 2-4", "Users", _SIZE, "small table"),
            Size("tables-size-4-6", "Seats 4-6", "Users", _SIZE, "family table"),
            Size("tables-size-6-8", "Seats 6-8", "Users", _SIZE, "large table"),
        ],
    )

    beds = Category(
        id="beds",
        name="Beds",
        icon_name="BedDouble",
        image_url="https://placehold.co/400x300.png",
        image_hint="bedroom bed",
        features=[
            Feature(
                id="beds-feat-frame",
                name="Frame Material",
                options=[
                    _option("beds-feat-frame", "wood", "Wood", "Trees", _SWATCH, "wooden frame"),
                    _option("beds-feat-frame", "metal", "Metal", "Wrench", _SWATCH, "metal frame"),
                    _option("beds-feat-frame", "upholstered", "Upholstered", "Sofa", _SWATCH, "upholstered frame"),
                ],
            ),
            Feature(
                id="beds-feat-headboard",
                name="Headboard",
                options=[
                    _option("beds-feat-headboard", "yes", "With Headboard", "Check", _THUMB, "bed headboard"),
                    _option("beds-feat-headboard", "no", "No Headboard", "X", _THUMB, "platform bed"),
                ],
            ),
        ],
        sizes=[
            Size("beds-size-full", "Full", "Square", _SIZE, "full bed"),
            Size("beds-size-queen", "Queen", "Square", _SIZE, "queen bed"),
            Size("beds-size-king", "King", "Square", _SIZE, "king bed"),
        ],
    )

    return [sofas, tables, beds]


# (category_id, feature_selections, size_id, min, max)
SEED_PRICES = [
    ("sofas", {"sofas-feat-seats": "sofas-feat-seats-opt-2", "sofas-feat-material": "sofas-feat-material-opt-fabric", "sofas-feat-style": ["sofas-feat-style-opt-modern"]}, "sofas-size-small", 300, 700),
    ("sofas", {"sofas-feat-seats": "sofas-feat-seats-opt-3", "sofas-feat-material": "sofas-feat-material-opt-fabric", "sofas-feat-style": ["sofas-feat-style-opt-modern"]}, "sofas-size-medium", 700, 1600),
    ("sofas", {"sofas-feat-seats": "sofas-feat-seats-opt-sectional", "sofas-feat-material": "sofas-feat-material-opt-leather", "sofas-feat-style": ["sofas-feat-style-opt-traditional"]}, "sofas-size-large", 1500, 3500),
    ("sofas", {"sofas-feat-seats": "sofas-feat-seats-opt-2", "sofas-feat-material": "sofas-feat-material-opt-velvet", "sofas-feat-style": ["sofas-feat-style-opt-midcentury"]}, "sofas-size-small", 500, 1000),
    ("sofas", {"sofas-feat-seats": "sofas-feat-seats-opt-3", "sofas-feat-material": "sofas-feat-material-opt-leather", "sofas-feat-style": ["sofas-feat-style-opt-modern"]}, "sofas-size-medium", 1200, 2500),
    ("sofas", {"sofas-feat-seats": "sofas-feat-seats-opt-2", "sofas-feat-material": "sofas-feat-material-opt-fabric", "sofas-feat-style": ["sofas-feat-style-opt-midcentury", "sofas-feat-style-opt-modern"]}, "sofas-size-small", 600, 1100),
    ("tables", {"tables-feat-shape": "tables-feat-shape-opt-rect", "tables-feat-material": "tables-feat-material-opt-wood"}, "tables-size-4-6", 350, 850),
    ("tables", {"tables-feat-shape": "tables-feat-shape-opt-round", "tables-feat-material": "tables-feat-material-opt-glass"}, "tables-size-2-4", 200, 600),
    ("tables", {"tables-feat-shape": "tables-feat-shape-opt-square", "tables-feat-material": "tables-feat-material-opt-metal"}, "tables-size-6-8", 500, 1200),
    ("beds", {"beds-feat-frame": "beds-feat-frame-opt-wood", "beds-feat-headboard": "beds-feat-headboard-opt-yes"}, "beds-size-queen", 400, 1000),
    ("beds", {"beds-feat-frame": "beds-feat-frame-opt-metal", "beds-feat-headboard": "beds-feat-headboard-opt-no"}, "beds-size-king", 300, 800),
    ("beds", {"beds-feat-frame": "beds-feat-frame-opt-upholstered", "beds-feat-headboard": "beds-feat-headboard-opt-yes"}, "beds-size-full", 500, 1200),
]


def seed_prices(service: EstimatorService) -> int:
    """
    Save the demo price list through the service.

    Returns:
        Number of saved entries.
    """
    for category_id, selections, size_id, min_price, max_price in SEED_PRICES:
        service.save_price(category_id, selections, size_id, min_price, max_price)
    logger.info("Seed price list loaded", entries=len(SEED_PRICES))
    return len(SEED_PRICES)
