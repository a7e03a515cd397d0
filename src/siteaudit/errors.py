"""Exception hierarchy for audit runs."""


class AuditError(Exception):
    """Base class for siteaudit errors."""


class FatalInputError(AuditError):
    """Input that makes the whole run impossible."""


class InvalidUrlError(FatalInputError):
    """The target string cannot be parsed as an absolute http(s) URL."""

    def __init__(self, raw_input: str, reason: str = ""):
        self.raw_input = raw_input
        self.reason = reason
        message = f"Invalid URL: {raw_input!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ProbeFailure(AuditError):
    """A probe's underlying call failed. Never escapes the probe boundary."""


class CollaboratorUnavailable(AuditError):
    """Summarization or persistence could not be completed."""
