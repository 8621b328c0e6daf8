"""
Error taxonomy for the coin identifier.

Every error carries a human-readable message that the controller shows to
the user as-is. The `kind` tag tells the three families apart:

  validation — bad upload (wrong type, too large, unreadable)
  load       — bundled default asset unavailable
  analyzer   — external AI call failed (network, auth, quota, bad response)
"""


class CoinAppError(Exception):
    kind = "error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(CoinAppError):
    kind = "validation"

    # Reasons
    UNSUPPORTED_TYPE = "unsupported_type"
    TOO_LARGE        = "too_large"
    READ_FAILED      = "read_failed"

    def __init__(self, reason: str, message: str = ""):
        super().__init__(message)
        self.reason = reason


class LoadError(CoinAppError):
    kind = "load"


class AnalyzerError(CoinAppError):
    kind = "analyzer"
