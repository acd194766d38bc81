class CatalogSearchError(Exception):
    """Base error for the catalog search package."""


class ContentLoadError(CatalogSearchError):
    """A content file could not be read or parsed."""


class InvalidContentError(CatalogSearchError):
    """A content record lacks a field required to identify it in the index."""

    def __init__(self, record_id: str | None, field: str):
        self.record_id = record_id
        self.field = field
        super().__init__(
            f"Content record {record_id or '<unknown>'!s} is missing required field '{field}'"
        )


class IndexFormatError(CatalogSearchError):
    """The search index artifact does not match the expected shape."""
