import json
import logging
import math
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from .config import settings

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE_TEXT = "Resposta gerada com sucesso!"


class WebhookError(Exception):
    """Raised when the webhook cannot return a usable response."""


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-05-01T12:00:00.000Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_payload(input_text: str, tone: str, now: Optional[datetime] = None) -> dict:
    return {
        "inputText": input_text.strip(),
        "tone": tone,
        "timestamp": utc_timestamp(now),
    }


def _truthy(value: Any) -> bool:
    # JSON truthiness: empty containers still count, empty strings and zero do not.
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and not math.isnan(value)
    return True


def _js_numbers(value: Any) -> Any:
    # JSON.stringify writes 1.0 as 1 and non-finite numbers as null.
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value) if value.is_integer() and abs(value) < 1e21 else value
    if isinstance(value, dict):
        return {key: _js_numbers(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_js_numbers(item) for item in value]
    return value


def extract_response_text(data: Any) -> str:
    """Pick the display text out of a webhook body.

    Precedence: ``response.output``, ``output``, ``response`` when it is a
    string, ``message``, then a generic success string. Non-string values are
    serialized to compact JSON so callers always get text.
    """
    if data is None:
        raise WebhookError("Webhook returned an empty JSON document")
    if not isinstance(data, dict):
        return FALLBACK_RESPONSE_TEXT

    nested = data.get("response")
    candidates = [
        nested.get("output") if isinstance(nested, dict) else None,
        data.get("output"),
        nested if isinstance(nested, str) else None,
        data.get("message"),
    ]
    value = next((c for c in candidates if _truthy(c)), FALLBACK_RESPONSE_TEXT)

    if not isinstance(value, str):
        value = json.dumps(_js_numbers(value), ensure_ascii=False, separators=(",", ":"))
    return value


class WebhookClient:
    """Posts a payload to the user's webhook and unwraps the reply."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport

    async def generate(self, url: str, input_text: str, tone: str) -> str:
        payload = build_payload(input_text, tone)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    url.strip(),
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise WebhookError(f"Webhook request failed: {exc}") from exc

        if not response.is_success:
            raise WebhookError(f"HTTP error! status: {response.status_code}")

        try:
            data = response.json()
        except ValueError as exc:
            raise WebhookError("Webhook returned a non-JSON body") from exc

        logger.debug("Webhook response: %r", data)
        text = extract_response_text(data)
        logger.info("Webhook reply extracted (%d chars)", len(text))
        return text


def get_webhook_client() -> WebhookClient:
    return WebhookClient(timeout=settings.webhook_timeout_seconds)
