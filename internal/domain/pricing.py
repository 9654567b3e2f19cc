"""
Domain model for pricing and selections.

Price entries are facts keyed by (category_id, canonical feature selections,
size_id). They have no identity beyond that composite key.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from .errors import InvalidPriceRangeError

SelectionValue = Union[str, list[str]]


def canonical_feature_value(value: Optional[SelectionValue]) -> str:
    """
    Canonical string form of a feature selection value.

    A single option id is returned as-is; a list of ids is sorted and
    comma-joined so that selection order never affects matching.

    Args:
        value: Option id, list of option ids, or None.

    Returns:
        Canonical value, empty string when nothing is selected.
    """
    if isinstance(value, (list, tuple)):
        return ",".join(sorted(value))
    return value or ""


def canonicalize_selections(selections: dict[str, SelectionValue]) -> dict[str, str]:
    """Canonicalize every value of a selection map, dropping empty ones."""
    result: dict[str, str] = {}
    for feature_id, value in selections.items():
        canonical = canonical_feature_value(value)
        if canonical:
            result[feature_id] = canonical
    return result


def split_canonical_value(value: str) -> list[str]:
    """Option ids contained in a canonical value."""
    return [part for part in value.split(",") if part]


@dataclass(frozen=True)
class PriceRange:
    """
    PriceRange value object.

    Attributes:
        min_price: Lower bound, non-negative.
        max_price: Upper bound, not below ``min_price``.
    """
    min_price: Decimal
    max_price: Decimal

    def __post_init__(self) -> None:
        """Validate price range constraints."""
        object.__setattr__(self, "min_price", Decimal(str(self.min_price)))
        object.__setattr__(self, "max_price", Decimal(str(self.max_price)))
        if not (self.min_price.is_finite() and self.max_price.is_finite()):
            raise InvalidPriceRangeError(self.min_price, self.max_price)
        if self.min_price < 0 or self.max_price < 0 or self.min_price > self.max_price:
            raise InvalidPriceRangeError(self.min_price, self.max_price)

    @classmethod
    def unpriced(cls) -> "PriceRange":
        """Sentinel reported for combinations without a price entry."""
        return cls(Decimal("0"), Decimal("0"))

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "min": float(self.min_price),
            "max": float(self.max_price),
        }


@dataclass
class PriceEntry:
    """
    PriceEntry is a priced combination of category, feature assignment and size.

    Attributes:
        category_id: Category the combination belongs to.
        feature_selections: Canonical map of feature id to option value.
        size_id: Size of the combination.
        price_range: Estimated price range.
        override_image_url: Optional image specific to this combination.
        override_image_hint: Hint for the override image.
    """
    category_id: str
    feature_selections: dict[str, str]
    size_id: str
    price_range: PriceRange
    override_image_url: Optional[str] = None
    override_image_hint: Optional[str] = None

    @property
    def key(self) -> tuple[str, frozenset, str]:
        """Composite key identifying the combination."""
        return (
            self.category_id,
            frozenset(self.feature_selections.items()),
            self.size_id,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "category_id": self.category_id,
            "feature_selections": dict(self.feature_selections),
            "size_id": self.size_id,
            "price_range": self.price_range.to_dict(),
            "override_image_url": self.override_image_url,
            "override_image_hint": self.override_image_hint,
        }


@dataclass
class UserSelection:
    """
    UserSelection is a transient, possibly partial choice made in the estimator.

    Attributes:
        category_id: Selected category, if any.
        feature_selections: Feature id to option id (or list for multi-select).
        size_id: Selected size, if any.
    """
    category_id: Optional[str] = None
    feature_selections: dict[str, SelectionValue] = field(default_factory=dict)
    size_id: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "category_id": self.category_id,
            "feature_selections": {
                k: list(v) if isinstance(v, (list, tuple)) else v
                for k, v in self.feature_selections.items()
            },
            "size_id": self.size_id,
        }


@dataclass
class ResolvedImage:
    """Most specific image for a selection; both fields None when unresolvable."""

    url: Optional[str] = None
    hint: Optional[str] = None


@dataclass(frozen=True)
class EstimationRecord:
    """
    Immutable snapshot of a completed estimation.

    Persisting records (history, favorites) is up to the consumer.

    Attributes:
        id: Unique record identifier.
        selections: Selection that produced the estimate.
        description: Generated item description.
        price_range: Estimated price, None when the combination is unpriced.
        timestamp: Creation time.
        name: Optional user-defined name.
        image: Image resolved for the selection.
    """
    id: str
    selections: UserSelection
    description: str
    price_range: Optional[PriceRange]
    timestamp: datetime = field(default_factory=datetime.utcnow)
    name: Optional[str] = None
    image: ResolvedImage = field(default_factory=ResolvedImage)

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "selections": self.selections.to_dict(),
            "description": self.description,
            "price_range": self.price_range.to_dict() if self.price_range else None,
            "timestamp": self.timestamp.isoformat(),
            "name": self.name,
            "image_url": self.image.url,
            "image_hint": self.image.hint,
        }


@dataclass
class PriceCombination:
    """
    One row of the administrative price grid.

    Unpriced rows carry ``PriceRange.unpriced()`` as a sentinel.
    """
    category_id: str
    category_name: str
    feature_selections: dict[str, str]
    feature_description: str
    size_id: str
    size_label: str
    price_range: PriceRange
    description: str
    is_priced: bool
    image_url: Optional[str] = None
    image_hint: Optional[str] = None
    override_image_url: Optional[str] = None
    override_image_hint: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "category_id": self.category_id,
            "category_name": self.category_name,
            "feature_selections": dict(self.feature_selections),
            "feature_description": self.feature_description,
            "size_id": self.size_id,
            "size_label": self.size_label,
            "price_range": self.price_range.to_dict(),
            "description": self.description,
            "is_priced": self.is_priced,
            "image_url": self.image_url,
            "image_hint": self.image_hint,
            "override_image_url": self.override_image_url,
            "override_image_hint": self.override_image_hint,
        }
