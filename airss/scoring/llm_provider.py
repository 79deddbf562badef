"""Completion provider interface and implementations."""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import openai
from openai import OpenAI

from ..errors import CompletionError, ConfigError

log = logging.getLogger(__name__)


class CompletionProvider(ABC):
    """Abstract base class for completion providers."""

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """
        Send one prompt as a single user message.

        Args:
            prompt: Fully rendered prompt text

        Returns:
            Text of the first choice

        Raises:
            CompletionError: if the provider call fails
        """

    @abstractmethod
    def list_models(self) -> List[Dict[str, str]]:
        """List models offered by the provider as ``{"id", "owned_by"}`` dicts."""

    @abstractmethod
    def get_usage_stats(self) -> Dict:
        """Get usage statistics."""


class OpenAIProvider(CompletionProvider):
    """OpenAI-compatible chat completion provider."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Initialize OpenAI provider.

        Args:
            api_key: API key for the endpoint
            model: Model name to use
            base_url: OpenAI-compatible endpoint
            timeout: Request timeout in seconds
        """
        kwargs = {"api_key": api_key, "base_url": base_url}
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = OpenAI(**kwargs)
        self.model = model
        self.total_tokens = 0
        self.api_calls = 0

    def complete(self, prompt: str) -> str:
        try:
            self.api_calls += 1
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.OpenAIError as e:
            raise CompletionError(f"Error calling AI: {e}") from e

        if response.usage:
            self.total_tokens += response.usage.total_tokens

        if not response.choices:
            raise CompletionError("AI response contained no choices")
        return response.choices[0].message.content or ""

    def list_models(self) -> List[Dict[str, str]]:
        try:
            page = self.client.models.list()
        except openai.OpenAIError as e:
            raise CompletionError(f"Error listing models: {e}") from e
        return [{"id": m.id, "owned_by": getattr(m, "owned_by", "") or ""} for m in page]

    def get_usage_stats(self) -> Dict:
        return {
            "total_tokens": self.total_tokens,
            "api_calls": self.api_calls,
            "model": self.model,
        }


def build_provider(llm_config: Dict) -> OpenAIProvider:
    """
    Create the provider from a resolved LLM config dict.

    Raises:
        ConfigError: if no API key is configured
    """
    api_key = llm_config.get("api_key")
    if not api_key:
        env_name = llm_config.get("api_key_env") or "API_KEY"
        raise ConfigError(
            f"{env_name} is not set; please set it in the config, environment, or command line"
        )

    log.debug("Using model %s at %s", llm_config.get("model"), llm_config.get("base_url"))
    return OpenAIProvider(
        api_key=api_key,
        model=llm_config["model"],
        base_url=llm_config.get("base_url"),
        timeout=llm_config.get("timeout"),
    )
