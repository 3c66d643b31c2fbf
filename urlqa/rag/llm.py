"""Gemini ``generateContent`` client.

A single non-streaming POST per prompt::

    POST {base_url}/models/{model}:generateContent
    x-goog-api-key: <key>
    {"contents": [{"parts": [{"text": "<prompt>"}]}]}

The answer is read from ``candidates[0].content.parts[0].text``.  No retries
are made and the transport's default timeout applies.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from urlqa.config import Settings, settings
from urlqa.errors import LlmError, MalformedResponse, MissingCredential, RemoteError, UnknownError

logger = logging.getLogger(__name__)


def _remote_message(response: httpx.Response) -> str:
    """Return the API-reported error message, or the HTTP status line."""
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        message = None
    if isinstance(message, str) and message:
        return message
    return f"{response.status_code} {response.reason_phrase}".strip()


def _extract_text(data: Any) -> str:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedResponse() from exc
    if not isinstance(text, str):
        raise MalformedResponse()
    return text


class GeminiClient:
    """Send prompts to a Gemini model and return the generated text.

    Args:
        api_key: Gemini API key.  An empty key is allowed here; :meth:`ask`
            then fails with :class:`~urlqa.errors.MissingCredential`.
        model: Model name, e.g. ``"gemini-2.0-flash"``.
        base_url: API root up to and including the version segment.
        client: Optional shared ``httpx.AsyncClient``; a private one is
            opened per call when omitted.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._client = client

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> "GeminiClient":
        config = config or settings
        return cls(
            api_key=config.gemini_api_key,
            model=config.gemini_model,
            base_url=config.gemini_base_url,
        )

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def _post(self, client: httpx.AsyncClient, prompt: str) -> httpx.Response:
        return await client.post(
            self.endpoint,
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": self.api_key,
            },
            json={"contents": [{"parts": [{"text": prompt}]}]},
        )

    async def ask(self, prompt: str) -> str:
        """Return the model's answer to *prompt*.

        Raises:
            MissingCredential: No API key configured; no request is sent.
            RemoteError: The API answered with a non-2xx status.
            MalformedResponse: The body lacks the generated-text path.
            UnknownError: Anything else that went wrong during the call.
        """
        if not self.has_credential:
            raise MissingCredential()

        try:
            if self._client is not None:
                response = await self._post(self._client, prompt)
            else:
                async with httpx.AsyncClient() as client:
                    response = await self._post(client, prompt)

            if not response.is_success:
                raise RemoteError(_remote_message(response), status_code=response.status_code)

            try:
                data = response.json()
            except ValueError as exc:
                raise MalformedResponse() from exc
            answer = _extract_text(data)
        except LlmError as exc:
            logger.warning("[gemini] %s: %s", exc.kind, exc.message)
            raise
        except Exception as exc:  # noqa: BLE001
            logger.exception("[gemini] request failed")
            raise UnknownError(str(exc) or exc.__class__.__name__) from exc

        logger.info("[gemini] ✓ %d character answer from %s", len(answer), self.model)
        return answer
