"""Error taxonomy for the league sync engine."""


class LeagueSyncError(Exception):
    """Base class for sync failures."""


class SourceFetchError(LeagueSyncError):
    """The source provider was unreachable or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConstraintMismatchError(LeagueSyncError):
    """The store has no unique constraint matching an upsert's conflict target."""


class RecordPersistError(LeagueSyncError):
    """Persisting a single record (match detail, special stat) failed."""

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message)
        self.context = context or {}


class PersistenceError(LeagueSyncError):
    """An unrecoverable store failure aborted the sync."""
