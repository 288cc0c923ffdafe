import json
import logging
import httpx
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from config.settings import Settings
from core.errors import UpstreamHttpError, UnknownError
from models.image_generate import ImageData, UpstreamMessage

logger = logging.getLogger(__name__)

class OpenRouterService:
    """Thin wrapper around OpenRouter's OpenAI-compatible chat completions API.

    Built once at startup and shared by every request; owns its HTTP client
    unless one is passed in.
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.api_key = settings.OPENROUTER_API_KEY
        self.base_url = settings.OPENROUTER_BASE_URL.rstrip('/')
        self.model = settings.OPENROUTER_MODEL
        self.headers = {
            "HTTP-Referer": settings.SITE_URL,
            "X-Title": settings.APP_TITLE,
            "Content-Type": "application/json"
        }
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=settings.OPENROUTER_TIMEOUT)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def build_payload(self, image_url: str, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{
                "role": "user",
                "content": [
                    {
                        "type": "text",
                        "text": prompt
                    },
                    {
                        "type": "image_url",
                        "image_url": {
                            "url": image_url
                        }
                    }
                ]
            }]
        }

    async def generate(self, image_url: str, prompt: str) -> UpstreamMessage:
        """Send the prompt and source image to the model and return its reply message"""
        headers = {**self.headers, "Authorization": f"Bearer {self.api_key}"}

        try:
            response = await self.client.post(
                f"{self.base_url}/chat/completions",
                json=self.build_payload(image_url, prompt),
                headers=headers
            )
        except httpx.HTTPError as error:
            logger.error("❌ OpenRouter request failed: %r", error)
            raise UnknownError(str(error)) from error

        if not response.is_success:
            body = _read_body(response)
            logger.error("❌ OpenRouter returned %s: %s", response.status_code, str(body)[:500])
            raise UpstreamHttpError(response.status_code, body)

        try:
            data = response.json()
        except ValueError as error:
            raise UnknownError(f"Invalid JSON from OpenRouter: {error}") from error

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Full API response: %s", json.dumps(data, indent=2))

        raw_message = _first_message(data)
        if raw_message is None:
            raise UnknownError("No message in OpenRouter response")

        raw_message = {**raw_message, "images": _coerce_images(raw_message.get("images"))}
        try:
            message = UpstreamMessage.model_validate(raw_message)
        except ValidationError as error:
            raise UnknownError(f"Unexpected message shape from OpenRouter: {error}") from error

        logger.info("✅ OpenRouter returned %d image(s) for model %s", len(message.images), self.model)
        return message

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()


def _read_body(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return response.text


def _first_message(data: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(data, dict):
        return None
    choices = data.get('choices')
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get('message')
    return message if isinstance(message, dict) else None


def _coerce_images(raw: Any) -> List[Dict[str, Any]]:
    """Keep only entries that look like ImageData; anything else becomes an empty list"""
    if not isinstance(raw, list):
        if raw is not None:
            logger.warning("⚠️ Ignoring non-list images field: %s", type(raw).__name__)
        return []

    images = []
    for entry in raw:
        try:
            images.append(ImageData.model_validate(entry).model_dump())
        except ValidationError:
            logger.warning("⚠️ Dropping malformed image entry: %s", str(entry)[:200])
    return images
