import logging
from typing import Any, Dict, List, Optional

import httpx

from resume_analyzer.config import Settings, settings as default_settings
from resume_analyzer.errors import (
    ConfigurationError,
    MalformedResponse,
    QuotaExhausted,
    RateLimited,
    UpstreamFailure,
)
from resume_analyzer.services.analysis_parser import extract_completion_text
from resume_analyzer.services.analysis_prompt import build_messages

logger = logging.getLogger(__name__)


class AIGatewayClient:
    """Chat-completion client for the AI gateway.

    One request per call, no retries. Upstream 429 and 402 map to
    ``RateLimited`` and ``QuotaExhausted``; any other failure is
    ``UpstreamFailure``.
    """

    def __init__(
        self,
        api_key: str,
        url: str,
        model: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.model = model
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, config: Settings = None, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "AIGatewayClient":
        config = config or default_settings
        if not config.lovable_api_key:
            logger.error("Missing AI gateway key: LOVABLE_API_KEY not set in environment")
            raise ConfigurationError("LOVABLE_API_KEY not configured")
        return cls(
            api_key=config.lovable_api_key,
            url=config.ai_gateway_url,
            model=config.ai_model,
            timeout=config.ai_request_timeout,
            transport=transport,
        )

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        """Sends one chat request and returns the first choice's text."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        body = {"model": self.model, "messages": messages}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(self.url, json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error("AI Gateway request failed: %s", e)
            raise UpstreamFailure() from e

        if not response.is_success:
            logger.error("AI Gateway error: %s %s", response.status_code, response.text)
            if response.status_code == 429:
                raise RateLimited()
            if response.status_code == 402:
                raise QuotaExhausted()
            raise UpstreamFailure()

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponse("AI response was not valid JSON") from e
        return extract_completion_text(payload)

    async def analyze_resume(self, resume_text: str) -> str:
        return await self.complete(build_messages(resume_text))
