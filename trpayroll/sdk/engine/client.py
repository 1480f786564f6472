"""Payrolla calculation engine client.

The orchestration code only depends on the CalculationEngine protocol, so
tests can hand in any object with an async calculate() method.
"""

import logging
from typing import Optional, Protocol, runtime_checkable

import httpx
from pydantic import ValidationError

from ..config import DEFAULT_API_URL, DEFAULT_TIMEOUT, EngineSettings, require_api_key
from ..errors import EngineError
from .schemas import CalculationResponse, WageCalculationModel

logger = logging.getLogger(__name__)

CALCULATE_PATH = "/calculate"


@runtime_checkable
class CalculationEngine(Protocol):
    """Anything that can calculate one payroll request."""

    async def calculate(self, model: WageCalculationModel) -> CalculationResponse: ...


class PayrollaEngine:
    """CalculationEngine backed by the Payrolla HTTP API."""

    def __init__(
        self,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._api_key = api_key
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings: EngineSettings) -> "PayrollaEngine":
        """Build an engine from resolved settings.

        Raises:
            MissingCredentialError: If no API key is configured
        """
        return cls(
            api_key=require_api_key(settings),
            api_url=settings.api_url,
            timeout=settings.timeout,
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.api_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Accept": "application/json",
                },
            )
        return self._client

    async def calculate(self, model: WageCalculationModel) -> CalculationResponse:
        """POST one calculation request.

        Raises:
            EngineError: On timeout, transport failure, non-2xx status or an
                undecodable response body
        """
        try:
            response = await self._get_client().post(CALCULATE_PATH, json=model.to_payload())
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise EngineError(f"Payrolla request timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise EngineError(
                f"Payrolla API returned {e.response.status_code}: {e.response.text.strip()}"
            ) from e
        except httpx.HTTPError as e:
            raise EngineError(f"Payrolla request failed: {e}") from e

        try:
            return CalculationResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise EngineError(f"Payrolla returned an unreadable response: {e}") from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client, if one was opened."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
