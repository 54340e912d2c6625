"""
client.py

Responsibility: Isolate all direct ReadmeForge HTTP API interaction.

This module must be the only place that:
- Constructs ReadmeForge API endpoints
- Sends HTTP requests to the generation service
- Interprets service responses / error payloads

The CLI decides what to do with the result (writing the file, reporting credits).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from readmeforge import __version__
from readmeforge.options import DEFAULT_API_BASE, DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate/action"


class RequestError(RuntimeError):
    pass


class TransportError(RequestError):
    """The service could not be reached (DNS, TLS, connection reset, timeout)."""


class ServiceError(RequestError):
    """The service answered, but with an error status or an unusable body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class GenerationResult:
    readme: str
    credits_remaining: int | float | None = None


def _excerpt(text: str, limit: int = 200) -> str:
    text = text.strip()
    return text if len(text) <= limit else text[:limit] + "..."


class ReadmeForgeClient:
    def __init__(
        self,
        api_key: str,
        api_base: str = DEFAULT_API_BASE,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key.strip():
            raise ValueError("API key is required.")
        self._api_key = api_key
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
            "User-Agent": f"readmeforge/{__version__}",
        }

    def _post(self, path: str, json_body: dict[str, Any]) -> Any:
        url = f"{self._api_base}{path}"
        logger.debug("POST %s", url)
        try:
            r = self._session.post(url, headers=self._headers(), json=json_body, timeout=self._timeout)
        except requests.Timeout as e:
            raise TransportError(f"Request to {url} timed out after {self._timeout:g}s") from e
        except requests.RequestException as e:
            raise TransportError(f"Could not reach {url}: {e}") from e
        logger.debug("POST %s -> %s", url, r.status_code)

        if r.status_code >= 400:
            message = f"HTTP {r.status_code}"
            try:
                payload = r.json()
            except ValueError:
                payload = None
            if isinstance(payload, dict) and payload.get("error"):
                message = str(payload["error"])
            raise ServiceError(message, status_code=r.status_code)

        try:
            return r.json()
        except ValueError as e:
            raise ServiceError(f"Invalid response: {_excerpt(r.text)}", status_code=r.status_code) from e

    def generate(
        self,
        repo_url: str,
        *,
        template: str,
        language: str,
        tone: str,
        include_emoji: bool,
    ) -> GenerationResult:
        """
        Ask the service to generate a README for repo_url.

        Raises TransportError if the service is unreachable and ServiceError if
        it rejects the request or returns something other than a README.
        """
        body = {
            "repoUrl": repo_url,
            "template": template,
            "customization": {
                "language": language,
                "tone": tone,
                "includeEmoji": include_emoji,
            },
        }
        data = self._post(GENERATE_PATH, body)

        if not isinstance(data, dict) or not isinstance(data.get("readme"), str):
            raise ServiceError(f"Invalid response: {_excerpt(str(data))}")

        credits = data.get("creditsRemaining")
        if isinstance(credits, bool) or not isinstance(credits, (int, float)):
            credits = None

        return GenerationResult(
            readme=data["readme"],
            credits_remaining=credits,
        )
