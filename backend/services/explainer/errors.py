"""
Error taxonomy for the code explanation pipeline.

Each class maps to one HTTP status in api/errors.py:
- ValidationError and subclasses -> 400
- ServiceUnavailableError -> 503
- MalformedResponseError and anything else -> 500
PersistenceError never reaches the HTTP layer.
"""


class CodeExplainerError(Exception):
    """Base class for all pipeline errors."""

    message = "Failed to analyze code. Please try again."

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(CodeExplainerError):
    """Request input rejected before any provider call."""

    field = ""
    message = "Invalid request data. Please check your code input and try again."


class EmptyCodeError(ValidationError):
    field = "code"
    message = "Code is required"


class CodeTooLongError(ValidationError):
    field = "code"

    def __init__(self, max_length: int = 10000, length: int = None):
        self.max_length = max_length
        self.length = length
        super().__init__(f"Code must be less than {max_length:,} characters")


class MissingLanguageError(ValidationError):
    field = "language"
    message = "Language is required"


class ServiceUnavailableError(CodeExplainerError):
    """Provider unreachable, rate-limited, misconfigured or failing at transport level."""

    message = "AI service temporarily unavailable. Please try again in a moment."


class MalformedResponseError(CodeExplainerError):
    """Provider answered, but not with a usable JSON explanation."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid response format from provider: {reason}")


class PersistenceError(CodeExplainerError):
    """A history record could not be written."""
