"""Custom exceptions for divsel."""


class DivselError(Exception):
    """Base exception for all divsel errors."""


class ConfigError(DivselError):
    """Configuration-related errors."""


class SelectionError(DivselError):
    """A selection request was rejected before any work was done."""


class EmptyInputError(SelectionError):
    """Raised when no embeddings (or items) are supplied."""

    def __init__(self, what: str = "embeddings"):
        super().__init__(f"No {what} provided for selection")


class InvalidCardinalityError(SelectionError):
    """Raised when a fixed selection size falls outside 1..n."""

    def __init__(self, k: object, n: int):
        self.k = k
        self.n = n
        super().__init__(f"Invalid k value: {k}. Must be between 1 and {n}")


class InvalidThresholdError(SelectionError):
    """Raised when a saturation threshold is negative or not finite."""

    def __init__(self, threshold: object):
        self.threshold = threshold
        super().__init__(
            f"Invalid saturation threshold: {threshold}. Must be a finite value >= 0"
        )


class DimensionMismatchError(SelectionError):
    """Raised in strict mode when embeddings disagree on dimensionality."""

    def __init__(self, dimensions: list[int]):
        self.dimensions = dimensions
        dims = ", ".join(str(d) for d in dimensions)
        super().__init__(f"Embeddings have inconsistent dimensions: {dims}")


class ItemCountMismatchError(SelectionError):
    """Raised when items and embeddings have different lengths."""

    def __init__(self, items: int, embeddings: int):
        super().__init__(
            f"Got {items} items but {embeddings} embeddings; counts must match"
        )
