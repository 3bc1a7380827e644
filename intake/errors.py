"""Error types raised while handling an application submission."""


class IntakeError(Exception):
    """Base class for intake failures."""


class ValidationError(IntakeError):
    """The submission is incomplete. Reported to the caller as 400."""


class PersistenceError(IntakeError):
    """The application record could not be written. Reported as 500."""


class NotificationError(IntakeError):
    """A staff notification could not be delivered. Logged only."""
