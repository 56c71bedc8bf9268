"""Error taxonomy of the site API.

Every error reaches the client as ``{"error": <message>}`` with the
``status_code`` of the exception class; handlers live in ``sitecms.main``.
"""


class SiteError(Exception):
    status_code = 500
    message = "Internal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(SiteError):
    status_code = 400
    message = "Invalid request"


class InvalidFile(ValidationError):
    message = "No file uploaded or invalid file type"


class AuthenticationError(SiteError):
    status_code = 401
    message = "Invalid credentials"


class Unauthenticated(SiteError):
    status_code = 401
    message = "Access denied"


class Forbidden(SiteError):
    status_code = 403
    message = "Invalid token"


class NotFound(SiteError):
    status_code = 404
    message = "Not found"


class PayloadTooLarge(SiteError):
    status_code = 413
    message = "File too large"


class StorageError(SiteError):
    status_code = 500
    message = "Failed to store file"


class DatabaseError(SiteError):
    status_code = 500
    message = "Database error"
