"""Error taxonomy shared by the auth layer, storage and handlers."""


class TrainingLogError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class Unauthorized(TrainingLogError):
    """Missing or invalid bearer token, or a failed credential check."""

    status_code = 401


class NotFound(TrainingLogError):
    """A referenced record does not exist."""

    status_code = 404


class PersistenceError(TrainingLogError):
    """The storage layer failed."""

    status_code = 500


class DuplicateRecordError(PersistenceError):
    """A unique constraint was violated (e.g. an email already registered)."""

    status_code = 409
