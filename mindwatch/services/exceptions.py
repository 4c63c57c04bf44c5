# mindwatch/services/exceptions.py

SERVICE_UNAVAILABLE_MESSAGE = "AI service temporarily unavailable. Please try again."


class AIServiceError(Exception):
    """Base exception for all AI-layer errors."""
    pass


class ModelUnavailable(AIServiceError):
    """Raised by the model gateway when the upstream call fails for any reason.

    `kind` is one of: auth, rate_limit, timeout, bad_response, unavailable.
    """
    def __init__(self, kind: str, task: str):
        super().__init__(f"Model call for '{task}' failed ({kind})")
        self.kind = kind
        self.task = task


class ServiceUnavailable(AIServiceError):
    """The only AI error surfaced to callers. Carries a user-safe message."""
    def __init__(self, message: str = SERVICE_UNAVAILABLE_MESSAGE):
        super().__init__(message)
        self.message = message
