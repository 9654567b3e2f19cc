"""
Domain model for the furniture catalog.

A category owns its features and sizes; a feature owns its options.
Nothing is shared across categories.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


DEFAULT_CATEGORY_IMAGE = "https://placehold.co/400x300.png"
DEFAULT_OPTION_IMAGE = "https://placehold.co/50x50.png"
DEFAULT_SIZE_IMAGE = "https://placehold.co/80x80.png"


class SelectionType(str, Enum):
    """How many options of a feature a selection may hold."""

    SINGLE = "single"
    MULTIPLE = "multiple"


def derive_image_hint(text: str, max_words: int = 2) -> str:
    """
    Build a search hint from a name or label.

    Args:
        text: Category name or option/size label.
        max_words: Number of leading words to keep.

    Returns:
        Lower-cased hint made of the first words of ``text``.
    """
    return " ".join(text.lower().split()[:max_words])


@dataclass
class FeatureOption:
    """
    FeatureOption is one concrete choice for a feature (e.g. Leather).

    Attributes:
        id: Unique identifier, immutable once assigned.
        label: Human-readable label.
        icon_name: Opaque icon reference resolved by the UI.
        image_url: Image URL or data URI.
        image_hint: Short search hint describing the image.
    """

    id: str
    label: str
    icon_name: Optional[str] = None
    image_url: Optional[str] = None
    image_hint: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "label": self.label,
            "icon_name": self.icon_name,
            "image_url": self.image_url,
            "image_hint": self.image_hint,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FeatureOption":
        """Build an option from its dictionary representation."""
        return cls(
            id=data["id"],
            label=data["label"],
            icon_name=data.get("icon_name"),
            image_url=data.get("image_url"),
            image_hint=data.get("image_hint"),
        )


@dataclass
class Feature:
    """
    Feature is a customizable attribute of a category (e.g. Material).

    Attributes:
        id: Unique identifier, immutable once assigned.
        name: Human-readable feature name.
        options: Ordered list of options; declaration order is significant.
        selection_type: Whether one or several options may be chosen.
    """

    id: str
    name: str
    options: list[FeatureOption] = field(default_factory=list)
    selection_type: SelectionType = SelectionType.SINGLE

    @property
    def is_multiple(self) -> bool:
        return self.selection_type == SelectionType.MULTIPLE

    def get_option(self, option_id: str) -> Optional[FeatureOption]:
        """
        Find an option by ID.

        Args:
            option_id: The option identifier.

        Returns:
            The option if present, None otherwise.
        """
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "name": self.name,
            "selection_type": self.selection_type.value,
            "options": [option.to_dict() for option in self.options],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Feature":
        """Build a feature from its dictionary representation."""
        return cls(
            id=data["id"],
            name=data["name"],
            options=[FeatureOption.from_dict(o) for o in data.get("options", [])],
            selection_type=SelectionType(data.get("selection_type", "single")),
        )


@dataclass
class Size:
    """
    Size is a category-scoped size or dimension choice.

    Attributes:
        id: Unique identifier, immutable once assigned.
        label: Human-readable label, e.g. "Small (50-69 inches)".
        icon_name: Opaque icon reference resolved by the UI.
        image_url: Image URL or data URI.
        image_hint: Short search hint describing the image.
    """

    id: str
    label: str
    icon_name: Optional[str] = None
    image_url: Optional[str] = None
    image_hint: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "label": self.label,
            "icon_name": self.icon_name,
            "image_url": self.image_url,
            "image_hint": self.image_hint,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Size":
        """Build a size from its dictionary representation."""
        return cls(
            id=data["id"],
            label=data["label"],
            icon_name=data.get("icon_name"),
            image_url=data.get("image_url"),
            image_hint=data.get("image_hint"),
        )


@dataclass
class Category:
    """
    Category entity representing a top-level furniture type (e.g. Sofas).

    Attributes:
        id: Unique identifier across the store, immutable once assigned.
        name: Human-readable category name.
        icon_name: Opaque icon reference resolved by the UI.
        image_url: Image URL or data URI.
        image_hint: Short search hint describing the image.
        features: Ordered features; may be empty.
        sizes: Ordered sizes; must be non-empty for the category to be priceable.
    """

    id: str
    name: str
    icon_name: str = ""
    image_url: str = ""
    image_hint: str = ""
    features: list[Feature] = field(default_factory=list)
    sizes: list[Size] = field(default_factory=list)

    def get_feature(self, feature_id: str) -> Optional[Feature]:
        """
        Find a feature by ID.

        Args:
            feature_id: The feature identifier.

        Returns:
            The feature if present, None otherwise.
        """
        for feature in self.features:
            if feature.id == feature_id:
                return feature
        return None

    def get_size(self, size_id: str) -> Optional[Size]:
        """
        Find a size by ID.

        Args:
            size_id: The size identifier.

        Returns:
            The size if present, None otherwise.
        """
        for size in self.sizes:
            if size.id == size_id:
                return size
        return None

    def priceable_features(self) -> list[Feature]:
        """Features that contribute a key to a priced combination."""
        return [f for f in self.features if f.options]

    @property
    def is_priceable(self) -> bool:
        return bool(self.sizes)

    def to_dict(self) -> dict:
        """
        Convert to dictionary representation.

        Returns:
            Dictionary with the category and its nested features and sizes.
        """
        return {
            "id": self.id,
            "name": self.name,
            "icon_name": self.icon_name,
            "image_url": self.image_url,
            "image_hint": self.image_hint,
            "features": [feature.to_dict() for feature in self.features],
            "sizes": [size.to_dict() for size in self.sizes],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        """Build a category from its dictionary representation."""
        return cls(
            id=data["id"],
            name=data["name"],
            icon_name=data.get("icon_name", ""),
            image_url=data.get("image_url", ""),
            image_hint=data.get("image_hint", ""),
            features=[Feature.from_dict(f) for f in data.get("features", [])],
            sizes=[Size.from_dict(s) for s in data.get("sizes", [])],
        )
