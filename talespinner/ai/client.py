"""Claude client returning schema-validated objects."""

import logging
from typing import Any, Dict, Optional, Type, TypeVar

import anthropic
from anthropic import AsyncAnthropic
from pydantic import BaseModel, ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import Settings
from ..exceptions import APIError, ConfigurationError, StructuredOutputError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

TOOL_NAME = "submit_result"


class StructuredClient:
    """Asks Claude for JSON objects that must match a pydantic schema.

    The model answers through a single forced tool call whose input schema is
    the pydantic model's JSON schema. Transport failures are retried by the
    SDK itself (``max_retries``); responses with the wrong shape are asked for
    again up to ``shape_retries`` times, so one object costs at most
    ``(shape_retries + 1) * (max_retries + 1)`` HTTP requests.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[Any] = None):
        self.settings = settings or Settings()
        if client is None:
            if not self.settings.api_key:
                raise ConfigurationError(
                    "ANTHROPIC_API_KEY environment variable or api_key setting is required"
                )
            client = AsyncAnthropic(
                api_key=self.settings.api_key,
                max_retries=self.settings.max_retries,
                timeout=600.0,  # 10 minute timeout
            )
        self.client = client
        self.model = self.settings.model
        self.max_tokens = self.settings.max_tokens
        self.temperature = self.settings.temperature
        self.max_retries = self.settings.max_retries
        self.shape_retries = self.settings.shape_retries
        self.retry_backoff = 1.0

    async def generate_object(self, prompt: str, schema: Type[T], stage: str = "") -> T:
        """Send a prompt and return the model's answer validated against ``schema``."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.shape_retries + 1),
            wait=wait_exponential(multiplier=self.retry_backoff, max=10),
            retry=retry_if_exception_type(StructuredOutputError),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                number = attempt.retry_state.attempt_number
                logger.info(f"Requesting {schema.__name__} ({stage or 'object'}), attempt {number}")
                payload = await self._make_request(prompt, schema)
                return self._validate(payload, schema)

    async def _make_request(self, prompt: str, schema: Type[BaseModel]) -> Dict[str, Any]:
        """Make a forced tool call and return the tool input."""
        tool = {
            "name": TOOL_NAME,
            "description": f"Submit the {schema.__name__} result.",
            "input_schema": schema.model_json_schema(),
        }
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                tools=[tool],
                tool_choice={"type": "tool", "name": TOOL_NAME},
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            logger.error(f"API request failed: {e}")
            raise APIError(f"API call failed: {e}") from e

        for block in getattr(response, "content", None) or []:
            if getattr(block, "type", None) == "tool_use" and getattr(block, "name", TOOL_NAME) == TOOL_NAME:
                if not isinstance(block.input, dict):
                    raise StructuredOutputError(f"Tool input is not an object: {type(block.input).__name__}")
                return block.input

        stop_reason = getattr(response, "stop_reason", None)
        logger.warning(f"Response contained no {TOOL_NAME} call (stop reason: {stop_reason})")
        raise StructuredOutputError(f"Model did not return a {schema.__name__} object")

    @staticmethod
    def _validate(payload: Dict[str, Any], schema: Type[T]) -> T:
        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"{schema.__name__} failed validation: {e.error_count()} errors")
            logger.debug(str(e))
            raise StructuredOutputError(f"Response does not match {schema.__name__}: {e}") from e

    def set_model(self, model_name: str) -> None:
        """Set the Claude model to use."""
        self.model = model_name

    def set_max_tokens(self, max_tokens: int) -> None:
        """Set the maximum tokens for responses."""
        self.max_tokens = max_tokens
