"""
Gemini Model Adapter

DESIGN DECISION: We use Google Gemini through google-generativeai because:
1. JSON response mode keeps replies machine-readable
2. Its transport errors are typed (google.api_core), so overloads and
   credential problems can be told apart without string matching
3. One async call per request fits the one-call-per-flow model

Timeout policy lives here, in configuration (GEMINI_REQUEST_TIMEOUT_SECONDS),
never in flow logic.
"""

from typing import Any, Optional

import google.generativeai as genai
import structlog
from google.api_core import exceptions as google_exceptions
from pydantic import ValidationError

from finsight.agents.model_adapter import (
    FailureKind,
    ModelInvocationError,
    StructuredModelAdapter,
)
from finsight.config import GeminiSettings, get_settings


logger = structlog.get_logger(__name__)


_OVERLOAD_ERRORS = (
    google_exceptions.ServiceUnavailable,
    google_exceptions.ResourceExhausted,
    google_exceptions.InternalServerError,
    google_exceptions.DeadlineExceeded,
)

_CREDENTIAL_ERRORS = (
    google_exceptions.PermissionDenied,
    google_exceptions.Unauthenticated,
)


def map_google_error(error: google_exceptions.GoogleAPIError) -> ModelInvocationError:
    """Translate a typed transport error into a structured failure kind."""
    message = str(error)

    if isinstance(error, _OVERLOAD_ERRORS):
        kind = FailureKind.SERVICE_OVERLOADED
    elif isinstance(error, _CREDENTIAL_ERRORS):
        kind = FailureKind.CONFIGURATION
    elif isinstance(error, google_exceptions.InvalidArgument) and "api key" in message.lower():
        kind = FailureKind.CONFIGURATION
    else:
        # Let the flow's message matching have a go
        kind = FailureKind.UNKNOWN_INVOCATION

    return ModelInvocationError(message, kind=kind)


class GeminiModelAdapter(StructuredModelAdapter):
    """
    Model adapter backed by Gemini.

    The SDK is configured on first use, not at construction, so an app
    without GEMINI_API_KEY still starts: flows that never reach the
    model keep working, and the ones that do get the configuration
    fallback.
    """

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        model: Optional[Any] = None,
    ):
        """
        Args:
            settings: Gemini settings. Loaded from the environment if None.
            model: A ready GenerativeModel (or compatible object).
                   Skips SDK configuration when given.
        """
        self._settings = settings
        self._model = model

    def _get_settings(self) -> GeminiSettings:
        if self._settings is None:
            try:
                self._settings = get_settings().gemini
            except ValidationError as e:
                raise ModelInvocationError(
                    "Gemini is not configured: GEMINI_API_KEY is missing or invalid",
                    kind=FailureKind.CONFIGURATION,
                ) from e
        return self._settings

    def _get_model(self) -> Any:
        """Configure Google Generative AI and create the model."""
        if self._model is None:
            settings = self._get_settings()
            genai.configure(api_key=settings.api_key)
            self._model = genai.GenerativeModel(
                model_name=settings.model_name,
                generation_config={
                    "temperature": settings.temperature,
                    "max_output_tokens": settings.max_tokens,
                    "response_mime_type": "application/json",
                },
            )
        return self._model

    def _request_options(self) -> dict:
        timeout = self._settings.request_timeout_seconds if self._settings else None
        return {"timeout": timeout} if timeout else {}

    async def _generate(self, prompt: str) -> Optional[str]:
        model = self._get_model()

        try:
            response = await model.generate_content_async(
                prompt,
                request_options=self._request_options(),
            )
        except google_exceptions.GoogleAPIError as e:
            raise map_google_error(e) from e

        try:
            return response.text
        except ValueError:
            # No candidate parts, e.g. the reply was blocked
            logger.warning(
                "gemini_reply_without_text",
                prompt_feedback=str(getattr(response, "prompt_feedback", "")),
            )
            return None
