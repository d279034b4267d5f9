"""
Error taxonomy shared by the store, services and API layers.

NotFoundError and ValidationError are expected business outcomes and are
turned into typed failure responses. EngineUnavailableError and
EngineRejectedError fail the whole operation.
"""


class CatalogSearchError(Exception):
    """Base class for all catalog search errors."""


class NotFoundError(CatalogSearchError):
    """Referenced document id does not exist."""

    def __init__(self, doc_id: str, message: str | None = None):
        self.doc_id = doc_id
        super().__init__(message or f"Document with ID {doc_id} not found")


class ValidationError(CatalogSearchError):
    """Malformed or out-of-range input."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid input")


class EngineUnavailableError(CatalogSearchError):
    """Transport failure talking to the search engine (connection, timeout)."""


class EngineRejectedError(CatalogSearchError):
    """The search engine answered with a structured error."""

    def __init__(self, message: str, status: int | None = None, error_type: str | None = None):
        self.status = status
        self.error_type = error_type
        super().__init__(message)
