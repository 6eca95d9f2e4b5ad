from typing import Optional


class ListingError(Exception):
    """Base error for the listing pipeline. `step` names where it failed."""

    kind = "listing_error"

    def __init__(self, message: str, step: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.step = step

    def __str__(self):
        return self.message


class AuthError(ListingError):
    kind = "auth_error"


class ValidationError(ListingError):
    kind = "validation_error"


class UploadError(ListingError):
    kind = "upload_error"


class PersistenceError(ListingError):
    kind = "persistence_error"
