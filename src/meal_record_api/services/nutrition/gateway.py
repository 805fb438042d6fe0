"""
Model gateway: the single call to the language model.

Defines the interface the pipeline depends on plus the LangChain-backed
implementation used in production.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
import openai
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Transport or provider failure while calling the model."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
        error_type: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.error_type = error_type

    def __repr__(self) -> str:
        return (
            f"GatewayError(status_code={self.status_code!r}, "
            f"error_code={self.error_code!r}, error_type={self.error_type!r}, "
            f"message={self.message!r})"
        )


class ModelGateway(ABC):
    """Sends one prompt pair to a model and returns its raw reply text."""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Name of the model behind this gateway."""
        ...

    @abstractmethod
    async def invoke(self, system_prompt: str, user_prompt: str) -> str:
        """
        Run a single completion. Never retries.

        Raises:
            GatewayError: On any transport or provider failure
        """
        ...


def _provider_error_body(body: Any) -> dict[str, Any]:
    """Return the ``error`` object of an OpenAI-style error body."""
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict):
            return error
    return {}


def to_gateway_error(exc: Exception) -> GatewayError:
    """Convert a provider/transport exception into a GatewayError."""
    if isinstance(exc, GatewayError):
        return exc

    if isinstance(exc, (openai.APITimeoutError, httpx.TimeoutException, asyncio.TimeoutError)):
        return GatewayError(str(exc) or "Request timed out", error_type="timeout")

    if isinstance(exc, openai.APIStatusError):
        error = _provider_error_body(exc.body)
        return GatewayError(
            error.get("message") or exc.message,
            status_code=exc.status_code,
            error_code=exc.code or error.get("code"),
            error_type=exc.type or error.get("type"),
        )

    if isinstance(exc, openai.APIError):
        error = _provider_error_body(exc.body)
        return GatewayError(
            exc.message,
            error_code=exc.code or error.get("code"),
            error_type=exc.type or error.get("type"),
        )

    # Other providers (e.g. Gemini) expose the HTTP status loosely.
    status_code = getattr(exc, "status_code", None) or getattr(exc, "code", None)
    return GatewayError(
        str(exc) or exc.__class__.__name__,
        status_code=status_code if isinstance(status_code, int) else None,
    )


class LangChainModelGateway(ModelGateway):
    """
    Gateway backed by a LangChain chat model.

    Usage:
        gateway = LangChainModelGateway(get_llm(settings))
        raw_text = await gateway.invoke(system_prompt, user_prompt)
    """

    def __init__(self, llm: BaseChatModel):
        """
        Initialize the gateway.

        Args:
            llm: Configured chat model (OpenAI or Gemini)
        """
        self._llm = llm
        self._model_name = getattr(llm, "model_name", None) or getattr(llm, "model", "unknown")

    @property
    def model_name(self) -> str:
        return str(self._model_name)

    async def invoke(self, system_prompt: str, user_prompt: str) -> str:
        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt),
        ]

        try:
            response = await self._llm.ainvoke(messages)
        except Exception as e:
            error = to_gateway_error(e)
            logger.warning(f"LLM call failed: {error!r}")
            raise error from e

        if getattr(response, "usage_metadata", None):
            logger.debug(
                "LLM usage",
                extra={
                    "model": self.model_name,
                    "input_tokens": response.usage_metadata.get("input_tokens", 0),
                    "output_tokens": response.usage_metadata.get("output_tokens", 0),
                },
            )

        content = response.content
        if isinstance(content, list):
            # Some providers return content blocks
            content = "".join(
                block.get("text", "") if isinstance(block, dict) else str(block)
                for block in content
            )
        return str(content)
