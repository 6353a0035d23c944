"""
Client-side exceptions.

Raised inside the login flow and converted to status text at the flow
boundary; callers of the controllers never see them.
"""


class TidbitClientError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class WalletUnavailableError(TidbitClientError):
    """Raised when no wallet provider is configured."""

    def __init__(self, message: str = "Wallet provider not found"):
        super().__init__(message, code="WALLET_UNAVAILABLE")


class WalletRejectedError(TidbitClientError):
    """Raised when the wallet declines account access or signing."""

    def __init__(self, message: str = "Request rejected by wallet"):
        super().__init__(message, code="WALLET_REJECTED")


class NonceRequestError(TidbitClientError):
    """Raised when the nonce endpoint answers with a non-success status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Nonce request failed (HTTP {status_code})", code="NONCE_REQUEST_FAILED")


class VerificationError(TidbitClientError):
    """Raised when the backend rejects the signed challenge."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Verification failed (HTTP {status_code})", code="VERIFICATION_FAILED")


class MalformedResponseError(TidbitClientError):
    """Raised when a backend response body is missing required fields."""

    def __init__(self, endpoint: str, reason: str):
        super().__init__(f"Malformed response from {endpoint}: {reason}", code="MALFORMED_RESPONSE")
