"""AI gateway adapter — implements ClassifierPort over an OpenAI-compatible API."""

from __future__ import annotations

import logging

import httpx
from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from querydesk.application.ports.classifier_port import ClassifierPort
from querydesk.domain.errors import (
    ClassificationFailed,
    PaymentRequired,
    RateLimited,
    UpstreamUnavailable,
)
from querydesk.domain.value_objects.enums import Category, Priority, Sentiment

logger = logging.getLogger(__name__)

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_MODEL = "google/gemini-2.5-flash"
DEFAULT_TEMPERATURE = 0.3


def _one_of(enum_cls) -> str:
    return "One of [" + ", ".join(member.value for member in enum_cls) + "]"


SYSTEM_PROMPT = f"""\
You are an expert query classification system. Analyze the user's query and provide:
1. Category: {_one_of(Category)}
2. Priority: {_one_of(Priority)}
3. Sentiment: {_one_of(Sentiment)}
4. Key Phrases: Extract 1-3 most relevant keywords or phrases

Rules for classification:
- Complaint: User is expressing dissatisfaction or reporting a problem
- Feature Request: User is requesting new functionality
- Technical Issue: User is experiencing bugs, errors, or technical problems
- General Inquiry: Questions about usage, features, or general information
- Billing: Anything related to payments, subscriptions, or invoicing

- High Priority: Urgent issues, system outages, security concerns, billing problems
- Medium Priority: Feature requests, non-urgent bugs, general complaints
- Low Priority: General inquiries, feature suggestions, positive feedback

- Positive: User is satisfied, praising, or expressing gratitude
- Neutral: Factual inquiries or neutral tone
- Negative: User is dissatisfied, frustrated, or complaining

Return ONLY a JSON object with this exact structure:
{{
  "category": "...",
  "priority": "...",
  "sentiment": "...",
  "keyPhrases": ["phrase1", "phrase2", "phrase3"]
}}"""


def build_user_prompt(query_text: str) -> str:
    """Wrap the raw query text for the user turn, quoted but not escaped."""
    return f'Analyze this query: "{query_text}"'


class GatewayClassifierAdapter(ClassifierPort):
    """Chat-completions implementation of ClassifierPort.

    The API key is injected here; an empty key means the adapter never
    builds a client and ``is_configured`` is False.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_GATEWAY_URL,
        model: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._api_key = (api_key or "").strip()
        self._model = model
        self._temperature = temperature
        self._client: AsyncOpenAI | None = None
        if self._api_key:
            # max_retries=0: a failed call is terminal for the request.
            self._client = AsyncOpenAI(
                api_key=self._api_key,
                base_url=base_url,
                max_retries=0,
                http_client=http_client,
            )

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    async def complete(self, query_text: str) -> str:
        """Send one chat completion request and return the message content.

        Returns an empty string when the 2xx response carries no content.
        """
        if self._client is None:
            raise RuntimeError("GatewayClassifierAdapter used without an API key")

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_user_prompt(query_text)},
                ],
                temperature=self._temperature,
            )
        except APIStatusError as e:
            logger.error("AI gateway error: %s %s", e.status_code, e.response.text)
            if e.status_code == 429:
                raise RateLimited() from e
            if e.status_code == 402:
                raise PaymentRequired() from e
            raise ClassificationFailed() from e
        except APIConnectionError as e:
            logger.error("AI gateway unreachable: %s", e)
            raise UpstreamUnavailable() from e

        return self._message_content(response)

    @staticmethod
    def _message_content(response) -> str:
        """Pull ``choices[0].message.content`` without trusting the shape."""
        choices = getattr(response, "choices", None) or []
        if not choices:
            logger.error("No choices in AI response: %r", response)
            return ""
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            logger.error("No content in AI response: %r", response)
            return ""
        return content
