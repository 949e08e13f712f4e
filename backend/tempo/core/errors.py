"""Errors raised by the zone settings services.

Routes translate these into structured 400 responses; anything else that
escapes a service is treated as an unexpected failure.
"""


class ZoneSettingsError(Exception):
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidArgument(ZoneSettingsError, ValueError):
    """Malformed or incomplete caller input."""

    kind = "invalid_argument"


class PreconditionFailed(ZoneSettingsError):
    """Operation needs configuration that does not exist yet."""

    kind = "precondition_failed"
