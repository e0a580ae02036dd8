"""
LLM Service for extracting contacts with Google Gemini

Handles prompt formatting, the API call and response parsing
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional, Protocol

import httpx
from google import genai
from google.genai import errors
from pydantic import ValidationError

from contact_extractor.models.contact import ExtractionResult

logger = logging.getLogger(__name__)


EXTRACTION_PROMPT = """Extract all contact information from the following email text. For each person found, provide their full name, email address, professional title, and phone number if available. If a field is missing, use an empty string. Only return valid contacts found in the text.

Write every person's name in Title Case (first letter of each name part upper case, the rest lower case). Apply this to names in any script: keep diacritics and accents exactly as written (for example "JOSÉ ÁLVAREZ" becomes "José Álvarez"), never strip or transliterate them, and leave scripts without letter case unchanged.

Email Content:
{text}"""

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "contacts": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {"type": "STRING", "description": "Full name of the person"},
                    "email": {"type": "STRING", "description": "Email address"},
                    "title": {"type": "STRING", "description": "Job title or role"},
                    "phone": {"type": "STRING", "description": "Phone number"},
                },
                "required": ["name", "email", "title", "phone"],
            },
        }
    },
    "required": ["contacts"],
}


class ExtractionError(Exception):
    """
    Extraction failed before a usable response was received

    Attributes:
        message: Human-readable explanation (from the service when available)
        kind: auth, rejected, unavailable, network or unknown
    """

    def __init__(self, message: str, kind: str = "unknown"):
        super().__init__(message)
        self.message = message
        self.kind = kind


class ExtractionClient(Protocol):
    """Anything that turns pasted text into contacts"""

    async def extract(self, text: str) -> ExtractionResult:
        ...


def parse_extraction_response(response_text: Optional[str]) -> ExtractionResult:
    """
    Parse the model output into an ExtractionResult

    Output that is empty, not JSON, or not shaped like the schema yields an
    empty result instead of an error.

    Args:
        response_text: Raw text returned by the model

    Returns:
        Parsed contacts, or an empty result
    """
    if not response_text:
        logger.error("LLM returned empty response")
        return ExtractionResult.empty()

    cleaned = response_text.strip()

    # Remove markdown code blocks if present
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    if cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    cleaned = cleaned.strip()

    try:
        return ExtractionResult.model_validate(json.loads(cleaned))
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON response from Gemini: {e}")
        logger.debug(f"Problematic JSON (first 500 chars): {cleaned[:500]}")
    except ValidationError as e:
        logger.error(f"Gemini response does not match the contact schema: {e}")
    return ExtractionResult.empty()


def _error_from_api(e: errors.APIError) -> ExtractionError:
    message = e.message or str(e)
    code = e.code or 0
    if code in (401, 403):
        kind = "auth"
    elif 400 <= code < 500:
        # Gemini reports an invalid key as 400 INVALID_ARGUMENT
        kind = "auth" if "api key" in message.lower() else "rejected"
    elif code >= 500:
        kind = "unavailable"
    else:
        kind = "unknown"
    return ExtractionError(message, kind=kind)


class GeminiExtractionClient:
    """
    Contact extraction backed by the Gemini generate_content API

    The SDK client is created on the first call, so a missing API key is
    reported as an extraction error rather than at startup.

    Examples:
        client = GeminiExtractionClient(api_key="...", model="gemini-3-flash-preview")
        result = await client.extract("From: Jane Doe <jane@x.com>")
    """

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        temperature: Optional[float] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            try:
                self._client = genai.Client(api_key=self.api_key)
            except ValueError as e:
                raise ExtractionError(f"Gemini client could not be created: {e}", kind="auth") from e
        return self._client

    def build_config(self) -> Dict[str, Any]:
        config: Dict[str, Any] = {
            "response_mime_type": "application/json",
            "response_schema": RESPONSE_SCHEMA,
        }
        if self.temperature is not None:
            config["temperature"] = self.temperature
        return config

    async def extract(self, text: str) -> ExtractionResult:
        """
        Extract contacts from pasted email text

        Args:
            text: Non-empty email headers or signatures

        Returns:
            ExtractionResult with contacts in the order returned by the model

        Raises:
            ExtractionError: If the service is unreachable, rejects the
                credentials, or rejects the request
        """
        client = self._get_client()
        logger.info(f"Calling Gemini with model={self.model}, input={len(text)} chars")

        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=EXTRACTION_PROMPT.format(text=text),
                config=self.build_config(),
            )
        except errors.APIError as e:
            logger.error(f"Gemini request failed: {e}")
            raise _error_from_api(e) from e
        except httpx.HTTPError as e:
            logger.error(f"Gemini request could not be sent: {e}")
            raise ExtractionError(f"Could not reach the Gemini service: {e}", kind="network") from e
        except (OSError, asyncio.TimeoutError) as e:
            # Raised by the aiohttp transport, which bypasses httpx
            logger.error(f"Gemini request could not be sent: {e!r}")
            raise ExtractionError(f"Could not reach the Gemini service: {e}", kind="network") from e
        except Exception as e:
            logger.error(f"Unexpected error calling Gemini: {e}", exc_info=True)
            raise ExtractionError(str(e) or type(e).__name__, kind="unknown") from e

        if getattr(response, "usage_metadata", None) is not None:
            token_usage = {
                "prompt_tokens": getattr(response.usage_metadata, "prompt_token_count", None),
                "completion_tokens": getattr(response.usage_metadata, "candidates_token_count", None),
                "total_tokens": getattr(response.usage_metadata, "total_token_count", None),
            }
            logger.info(f"Token usage: {token_usage}")

        result = parse_extraction_response(response.text)
        logger.info(f"✓ Extracted {len(result.contacts)} contact(s)")
        return result
