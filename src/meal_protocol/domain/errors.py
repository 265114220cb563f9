"""Errors raised by protocol calculations."""


class ProtocolError(Exception):
    """Base error for protocol calculations."""


class ProtocolValidationError(ProtocolError, ValueError):
    """Input rejected before any calculation starts."""


class FoodLookupError(ProtocolError):
    """The reference table could not be queried for a search key."""

    def __init__(self, key: str, cause: Exception | None = None) -> None:
        super().__init__(f"Food lookup failed for {key!r}: {cause}")
        self.key = key
        self.cause = cause


class CalculationError(ProtocolError):
    """The calculation could not reach the reference table at all."""
