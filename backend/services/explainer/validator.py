"""
Input validation for explanation requests.

Runs before any provider call. The checked values are never modified:
whitespace only matters for the emptiness test.
"""

from typing import Optional

from config.settings import settings
from models.explanation import ExplainRequest
from services.explainer.errors import (
    EmptyCodeError,
    CodeTooLongError,
    MissingLanguageError,
)


def validate_explain_request(
    request: ExplainRequest,
    max_length: Optional[int] = None,
) -> ExplainRequest:
    """
    Check a request and return it unchanged.

    Raises:
        EmptyCodeError: code is empty or whitespace-only
        CodeTooLongError: code is longer than max_length characters
        MissingLanguageError: language is empty or whitespace-only
    """
    if max_length is None:
        max_length = settings.MAX_CODE_LENGTH

    if not request.code or not request.code.strip():
        raise EmptyCodeError()

    if len(request.code) > max_length:
        raise CodeTooLongError(max_length=max_length, length=len(request.code))

    if not request.language or not request.language.strip():
        raise MissingLanguageError()

    return request
