class OneAccountError(Exception):
    """Base class for all errors raised by the staged-auth flow.

    ``message`` is safe to show to the client; ``str(exc)`` may carry detail
    that must stay in the logs.
    """

    message = "cannot authorize the request"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)


class InvalidRequestBody(OneAccountError):
    """Request body is not a JSON object."""

    message = "cannot parse request body"


class MissingIdentifier(OneAccountError):
    """No uuid was supplied."""

    message = "uuid is required"


class InvalidIdentifier(OneAccountError):
    """uuid is present but is not a non-empty string."""

    message = "incorrect uuid"


class MissingBearerToken(OneAccountError):
    message = "empty or wrong bearer token"


class EntryNotFound(OneAccountError):
    """No live staged entry for the identifier (never staged, expired or consumed)."""

    message = "engine error: key is not found"


class StoreMisconfigured(OneAccountError):
    """AdapterStore was asked to use a function that was never supplied."""

    message = "engine error: store is not configured"


class StoreWriteFailed(OneAccountError):
    message = "engine error: cannot set"


class VerificationFailed(OneAccountError):
    """The remote authority did not confirm the token for this identifier."""

    message = "cannot verify the request"


class VerificationError(Exception):
    """Raised by verifier implementations."""

    pass


class VerificationRejected(VerificationError):
    """The remote authority answered and refused the token."""

    pass


class VerifierUnavailable(VerificationError):
    """Transport failure or unreadable answer from the remote authority."""

    pass
