"""Error taxonomy shared by the HTTP layer and the upstream client."""
from __future__ import annotations

class RelayError(Exception):
    """Base exception for relay errors."""

    status_code = 500
    public_message = "Internal server error."

class InvalidInputError(RelayError):
    """Raised when the request carries no usable diff."""

    status_code = 400
    public_message = "Missing diff data."

class UpstreamError(RelayError):
    """Raised for any failure talking to the generation service."""

    status_code = 500
    public_message = "Failed to generate commit message."

class PayloadTooLargeError(RelayError):
    """Raised when the request body exceeds the configured limit."""

    status_code = 413
    public_message = "Payload too large."
