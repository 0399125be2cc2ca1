"""Error types raised by the batch replace tool."""


class BatchReplaceError(Exception):
    """Base class for all batch replace errors."""


class ConfigurationError(BatchReplaceError):
    """Invalid or conflicting options; raised before any storage mutation."""


class NoMatchesError(BatchReplaceError):
    """The search did not match any stored string."""


class InvalidAnswerError(BatchReplaceError):
    """Operator answer outside the accepted alphabet of the current phase."""

    def __init__(self, answer: str, accepted):
        self.answer = answer
        self.accepted = tuple(accepted)
        super().__init__(
            f"Invalid answer {answer!r}, expected one of: {', '.join(self.accepted)}"
        )


class StoreError(BatchReplaceError):
    """Read or write failure in the string store."""
