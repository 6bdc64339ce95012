"""Advice service HTTP client with exponential backoff retry logic"""

import httpx
import asyncio
import logging
from typing import Dict, Any
from finsim_engine.config import settings
from finsim_engine.domain.models import AdvisorAnalysis
from finsim_engine.domain.exceptions import AdvisorServiceError
from finsim_engine.infrastructure.observability.metrics import advisor_latency_histogram, advisor_failure_counter

logger = logging.getLogger(__name__)


class AdvisorClient:
    """Client for the external text-generation service that writes financial advice"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.advisor_api_base
        self.timeout = timeout or settings.advisor_timeout_seconds
        self.max_retries = max_retries or settings.advisor_max_retries
        self.backoff_base = settings.advisor_backoff_base if backoff_base is None else backoff_base
        self.transport = transport

    async def analyze(self, payload: Dict[str, Any]) -> AdvisorAnalysis:
        """
        Send an analysis request built by build_advisor_payload.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s (base * 2^(attempt-1))
        - Retries on 5xx errors and network failures; 4xx fails immediately
        - Tracks latency histogram and failure counter

        Raises:
            AdvisorServiceError: After the final attempt, on a 4xx, or on a malformed reply
        """
        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while True:
                try:
                    with advisor_latency_histogram.time():
                        response = await client.post(f"{self.base_url}/analyze", json=payload)
                        response.raise_for_status()
                    return self._parse(response)

                except httpx.HTTPStatusError as e:
                    advisor_failure_counter.inc()
                    if e.response.status_code < 500:
                        raise AdvisorServiceError(f"Advice service rejected request: {e.response.status_code}") from e
                    attempt += 1
                    if attempt >= self.max_retries:
                        raise AdvisorServiceError(
                            f"Advice service error after {attempt} attempts: {e.response.status_code}"
                        ) from e

                except httpx.RequestError as e:
                    advisor_failure_counter.inc()
                    attempt += 1
                    if attempt >= self.max_retries:
                        raise AdvisorServiceError(f"Advice service unreachable after {attempt} attempts") from e

                backoff = self.backoff_base * (2 ** (attempt - 1))
                logger.warning("Advice service call failed, retrying", extra={"attempt": attempt, "backoff_s": backoff})
                await asyncio.sleep(backoff)

    @staticmethod
    def _parse(response: httpx.Response) -> AdvisorAnalysis:
        try:
            data = response.json()
            return AdvisorAnalysis(
                summary=str(data["summary"]),
                recommendations=[str(item) for item in data["recommendations"]],
                score=float(data["score"]),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise AdvisorServiceError(f"Invalid analysis data from advice service: {e}") from e
