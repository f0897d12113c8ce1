# /eduguide/services/gemini_service.py

"""
The gateway to the external text-completion service (Google Gemini).

`GeminiGateway` is built from a `Settings` object at application startup and
held on `app.state`; nothing here reads the environment. A missing API key does
not stop the application from starting: calls fail with
`SuggestionCredentialError` and the status probe reports the service as
unavailable.

Every call is bounded by `settings.gemini_timeout_seconds`. Failures are
classified into quota, credential, timeout and generic errors so the routers can
report each one distinctly. Calls are never retried.
"""

import asyncio
import logging
from typing import Callable, Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from google.generativeai.types import GenerationConfig
from fastapi import Request

from ..core.config import Settings, get_settings
from ..models.suggestion_model import GatewayStatus
from .prompt_library import STATUS_PROBE_PROMPT

logger = logging.getLogger(__name__)


# --- Error taxonomy ---

class SuggestionGatewayError(Exception):
    """Base class for failures of the external completion service."""
    status_code = 502
    default_message = "Failed to generate content with the Gemini API."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class SuggestionQuotaError(SuggestionGatewayError):
    status_code = 429
    default_message = "API quota exceeded. Please try again later."


class SuggestionCredentialError(SuggestionGatewayError):
    status_code = 401
    default_message = "Invalid API key. Please check your configuration."


class SuggestionTimeoutError(SuggestionGatewayError):
    status_code = 504
    default_message = "The Gemini API did not respond in time."


class SuggestionServiceError(SuggestionGatewayError):
    status_code = 502


def classify_gateway_error(error: BaseException) -> SuggestionGatewayError:
    """Maps an exception raised by the Gemini client onto the error taxonomy."""
    if isinstance(error, SuggestionGatewayError):
        return error

    if isinstance(error, (asyncio.TimeoutError, google_exceptions.DeadlineExceeded)):
        return SuggestionTimeoutError()

    text = str(error).lower()
    if isinstance(error, (google_exceptions.ResourceExhausted, google_exceptions.TooManyRequests)) \
            or "quota" in text or "rate limit" in text:
        return SuggestionQuotaError()

    if isinstance(error, (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied)) \
            or "api key not valid" in text or "api_key_invalid" in text:
        return SuggestionCredentialError()

    return SuggestionServiceError(f"Failed to generate content with the Gemini API: {error}")


# --- Gateway ---

class GeminiGateway:
    def __init__(self, settings: Settings, model_factory: Optional[Callable] = None):
        """
        Args:
            settings: Supplies the API key, model name and request timeout.
            model_factory: Builds a model object exposing `generate_content_async`.
                Defaults to `genai.GenerativeModel`.
        """
        self.model_name = settings.gemini_model
        self.timeout_seconds = settings.gemini_timeout_seconds
        self._api_key = settings.google_api_key
        self._model_factory = model_factory or genai.GenerativeModel
        if self._api_key:
            genai.configure(api_key=self._api_key)
        else:
            logger.warning("GOOGLE_API_KEY is not set; teaching suggestions are unavailable.")

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def generate_text(self, prompt: str, temperature: float = 0.7) -> str:
        """Sends one prompt and returns the generated text unmodified."""
        if not self.is_configured:
            raise SuggestionCredentialError("Gemini API key not configured.")

        try:
            model = self._model_factory(self.model_name)
            config = GenerationConfig(temperature=temperature)
            response = await asyncio.wait_for(
                model.generate_content_async(
                    prompt,
                    generation_config=config,
                    request_options={"timeout": self.timeout_seconds},
                ),
                timeout=self.timeout_seconds,
            )
            if not response.parts:
                raise ValueError("AI model returned an empty response.")
            return response.text
        except Exception as e:
            error = classify_gateway_error(e)
            logger.error(
                "Gemini call failed (model=%s, classified=%s): %s",
                self.model_name, type(error).__name__, e,
            )
            raise error from e

    async def check_status(self) -> GatewayStatus:
        """
        Probes the credential with a minimal completion. The probe's output is
        discarded; only availability is reported.
        """
        if not self.is_configured:
            return GatewayStatus(available=False, message="Gemini API key not configured", model=self.model_name)
        try:
            await self.generate_text(STATUS_PROBE_PROMPT, temperature=0.0)
        except SuggestionCredentialError:
            return GatewayStatus(available=False, message="Gemini API key is invalid or expired", model=self.model_name)
        except SuggestionGatewayError as e:
            return GatewayStatus(available=False, message=e.message, model=self.model_name)
        return GatewayStatus(
            available=True,
            message="Gemini API is available and configured correctly",
            model=self.model_name,
        )


def get_gemini_gateway(request: Request) -> GeminiGateway:
    """
    FastAPI dependency returning the gateway created at startup. Falls back to
    building one from the current settings when the lifespan did not run.
    """
    gateway = getattr(request.app.state, "gemini_gateway", None)
    if gateway is None:
        gateway = GeminiGateway(get_settings())
        request.app.state.gemini_gateway = gateway
    return gateway
