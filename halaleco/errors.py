# halaleco/errors.py


class ServiceError(Exception):
    """A scoring/ledger call failed; rendered as {success: false, message, error}."""

    def __init__(self, message: str, status_code: int = 500, error: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error = error
