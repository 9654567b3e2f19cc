"""
Domain-specific exceptions.

Custom exceptions for catalog lookups, price validation and selection rules.
"""


class DomainError(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str) -> None:
        """
        Initialize domain error.

        Args:
            message: Error message describing the issue.
        """
        self.message = message
        super().__init__(self.message)


class DomainValidationError(DomainError):
    """Exception raised when domain validation fails."""
    pass


class NotFoundError(DomainError):
    """Exception raised when a catalog entity id does not resolve."""

    entity = "Entity"

    def __init__(self, entity_id: str) -> None:
        """
        Initialize not found error.

        Args:
            entity_id: The ID that was not found.
        """
        super().__init__(f"{self.entity} with ID {entity_id} not found")
        self.entity_id = entity_id


class CategoryNotFoundError(NotFoundError):
    """Exception raised when a category is not found."""

    entity = "Category"


class FeatureNotFoundError(NotFoundError):
    """Exception raised when a feature is not found in its category."""

    entity = "Feature"


class OptionNotFoundError(NotFoundError):
    """Exception raised when an option is not found in its feature."""

    entity = "Option"


class SizeNotFoundError(NotFoundError):
    """Exception raised when a size is not found in its category."""

    entity = "Size"


class InvalidPriceRangeError(DomainValidationError):
    """Exception raised for a negative or inverted price range."""

    def __init__(self, min_price: float, max_price: float) -> None:
        """
        Initialize invalid price range error.

        Args:
            min_price: Requested lower bound.
            max_price: Requested upper bound.
        """
        super().__init__(
            f"Invalid price range {min_price}-{max_price}: "
            "bounds must be non-negative and min must not exceed max"
        )
        self.min_price = min_price
        self.max_price = max_price


class IncompleteSelectionError(DomainValidationError):
    """Exception raised when a price entry does not cover every feature."""

    def __init__(self, category_id: str, missing: list[str]) -> None:
        """
        Initialize incomplete selection error.

        Args:
            category_id: Category the entry belongs to.
            missing: Feature IDs without a selected option.
        """
        super().__init__(
            f"Selection for category {category_id} is missing features: "
            + ", ".join(missing)
        )
        self.category_id = category_id
        self.missing = missing


class PriceEntryNotFoundError(NotFoundError):
    """Exception raised when no price entry exists for a combination."""

    entity = "Price entry"
