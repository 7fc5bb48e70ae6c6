class ItemValidationError(ValueError):
    """Raised when a new item is rejected (empty topic, non-positive duration)."""


class ImportRejected(ValueError):
    """Raised when stored or imported text is not a valid item collection."""


class ItemNotFound(LookupError):
    """Raised when an item id is not present in the collection."""
