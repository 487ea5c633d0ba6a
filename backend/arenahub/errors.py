"""
Exceptions raised by the leaderboard core.

Each carries the client-facing `message`, the HTTP status the API layer
should answer with, and an optional `reason` detail.
"""


class LeaderboardError(Exception):
    """Base exception for leaderboard errors."""
    status_code = 400

    def __init__(self, message: str, reason: str = None, status_code: int = None):
        super().__init__(message)
        self.message = message
        self.reason = reason
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        payload = {'success': False, 'error': self.message}
        if self.reason:
            payload['reason'] = self.reason
        return payload


class ValidationError(LeaderboardError):
    """Missing or malformed request fields. Nothing was mutated."""
    status_code = 400


class MissingFields(ValidationError):
    def __init__(self):
        super().__init__('Missing required fields')


class InvalidScore(ValidationError):
    def __init__(self):
        super().__init__('Invalid score')


class InvalidTimestamp(ValidationError):
    def __init__(self):
        super().__init__('Invalid timestamp')


class InvalidGame(ValidationError):
    def __init__(self):
        super().__init__('Invalid game')


class AuthenticationError(LeaderboardError):
    """The signed submission could not be attributed to the claimed address."""
    status_code = 401

    def __init__(self, reason: str):
        super().__init__('Authentication failed', reason=reason)


class InvalidSignature(AuthenticationError):
    def __init__(self):
        super().__init__('Invalid signature')


class InvalidSignatureFormat(AuthenticationError):
    def __init__(self, details: str = None):
        super().__init__('Invalid signature format')
        self.details = details


class TimestampExpired(AuthenticationError):
    def __init__(self, skew_ms: int = None):
        super().__init__('Timestamp expired')
        self.skew_ms = skew_ms


class DuplicateSubmission(LeaderboardError):
    """Same (game, address, timestamp) already accepted."""
    status_code = 400

    def __init__(self):
        super().__init__('Score already submitted')


class CredentialError(LeaderboardError):
    pass


class MissingCredential(CredentialError):
    status_code = 400

    def __init__(self):
        super().__init__('Missing admin password')


class InvalidCredential(CredentialError):
    status_code = 401

    def __init__(self):
        super().__init__('Invalid admin password')


class StoreUnavailable(LeaderboardError):
    """The backing store could not complete the operation."""
    status_code = 500

    def __init__(self, operation: str, details: str = None):
        super().__init__('Storage unavailable')
        self.operation = operation
        self.details = details
