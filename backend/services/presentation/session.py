"""
Presentation state for the explain form.

ExplainSession is the view-model behind the web page in static/: the page's
script follows the same states and rules, so the behaviour can be tested
here without a browser.

States:
    idle -> validating -> submitting -> success | error

- validating fails straight to error, without a request
- submitting keeps the inputs editable and never cancels the request
- every submission gets a monotonic id; only the latest one may update
  the displayed state, older responses are dropped
- a new submission clears the previous result and error
"""

import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

import httpx

from models.explanation import ExplainRequest, ExplanationResult
from services.explainer.errors import ValidationError
from services.explainer.validator import validate_explain_request


logger = logging.getLogger(__name__)

GENERIC_ERROR = "Failed to analyze code. Please try again."
CONNECTION_ERROR = "Failed to connect to API"


class FormState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class ErrorKind(str, Enum):
    VALIDATION = "validation"  # field-level, fix the input
    SERVICE = "service"  # generic, try again


class DisplayedError:
    def __init__(self, kind: ErrorKind, message: str, field: Optional[str] = None):
        self.kind = kind
        self.message = message
        self.field = field

    def __repr__(self) -> str:
        return f"DisplayedError({self.kind.value!r}, {self.message!r}, field={self.field!r})"


class ExplainApiError(Exception):
    """Non-2xx answer (or no answer) from the explain endpoint."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


Sender = Callable[[ExplainRequest], Awaitable[ExplanationResult]]


class HttpExplainTransport:
    """
    Sends explain requests to the backend over HTTP.

    Pass an httpx.AsyncClient with base_url set (tests use ASGITransport).
    """

    def __init__(self, client: httpx.AsyncClient, path: str = "/api/explain-code"):
        self.client = client
        self.path = path

    async def __call__(self, request: ExplainRequest) -> ExplanationResult:
        try:
            response = await self.client.post(
                self.path,
                json={"code": request.code, "language": request.language},
            )
        except httpx.HTTPError as e:
            logger.warning("Explain request failed: %s", e)
            raise ExplainApiError(0, CONNECTION_ERROR) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_success:
            try:
                return ExplanationResult.model_validate(body)
            except ValueError as e:
                # Not JSON, or JSON that does not fit the result shape
                logger.warning("Unreadable explain response: %s", e)
                raise ExplainApiError(response.status_code, GENERIC_ERROR) from e

        message = GENERIC_ERROR
        if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
            message = body["error"]
        raise ExplainApiError(response.status_code, message)


class ExplainSession:
    """Form state for one browser tab."""

    def __init__(self, send: Sender, code: str = "", language: str = "javascript"):
        self.send = send
        self.code = code
        self.language = language

        self.state = FormState.IDLE
        self.result: Optional[ExplanationResult] = None
        self.error: Optional[DisplayedError] = None

        self._last_request_id = 0

    @property
    def submit_enabled(self) -> bool:
        return self.state != FormState.SUBMITTING

    @property
    def loading(self) -> bool:
        return self.state == FormState.SUBMITTING

    def edit(self, code: str = None, language: str = None) -> None:
        """Change the inputs. An in-flight request is left alone."""
        if code is not None:
            self.code = code
        if language is not None:
            self.language = language

        if self.state in (FormState.SUCCESS, FormState.ERROR):
            self.state = FormState.IDLE
            self.error = None

    async def submit(self) -> bool:
        """
        Validate and send the current inputs.

        Returns True if this submission's outcome is what is now displayed,
        False if it was rejected by validation or superseded by a newer one.
        """
        self._last_request_id += 1
        request_id = self._last_request_id

        self.state = FormState.VALIDATING
        self.result = None
        self.error = None

        request = ExplainRequest(code=self.code, language=self.language)
        try:
            validate_explain_request(request)
        except ValidationError as e:
            self.state = FormState.ERROR
            self.error = DisplayedError(ErrorKind.VALIDATION, e.message, field=e.field)
            return False

        self.state = FormState.SUBMITTING

        try:
            result = await self.send(request)
        except ExplainApiError as e:
            if request_id != self._last_request_id:
                return False
            self.state = FormState.ERROR
            self.error = DisplayedError(ErrorKind.SERVICE, e.message or GENERIC_ERROR)
            return True

        if request_id != self._last_request_id:
            logger.debug("Dropping stale response for request %d", request_id)
            return False

        self.result = result
        self.state = FormState.SUCCESS
        return True
