"""
LLM Providers — Abstraction over the compliance classifier

Supports: OpenRouter (default), OpenAI, Claude
All providers implement the same complete(system, user) interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from ..config import Config, LLMConfig


@dataclass
class LLMResponse:
    """Response from LLM including token usage."""
    text: str
    input_tokens: int = 0
    output_tokens: int = 0


class LLMProvider(ABC):
    """Abstract base for LLM providers."""

    name: str = ""

    @abstractmethod
    def complete(self, system: str, user: str, max_tokens: int = 2048) -> LLMResponse:
        """
        Get completion from LLM.

        Args:
            system: System prompt
            user: User message
            max_tokens: Maximum tokens in response

        Returns:
            LLMResponse with text and token usage
        """
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Check if provider is configured and ready."""
        pass


class OpenAIProvider(LLMProvider):
    """OpenAI chat completions provider."""

    name = "openai"

    def __init__(self, config: LLMConfig):
        self.config = config
        self._client = None
        self._init_client()

    def _init_client(self):
        if not self.config.api_key:
            return
        try:
            import openai
            kwargs = {"api_key": self.config.api_key}
            if self.config.base_url:
                kwargs["base_url"] = self.config.base_url
            self._client = openai.OpenAI(**kwargs)
        except ImportError:
            pass

    @property
    def is_available(self) -> bool:
        return self._client is not None

    def complete(self, system: str, user: str, max_tokens: int = 2048) -> LLMResponse:
        if not self._client:
            raise RuntimeError(f"{self.name} client not initialized")

        response = self._client.chat.completions.create(
            model=self.config.effective_model,
            max_tokens=max_tokens,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user}
            ]
        )

        # Extract token usage from response
        usage = getattr(response, 'usage', None)
        input_tokens = getattr(usage, 'prompt_tokens', 0) if usage else 0
        output_tokens = getattr(usage, 'completion_tokens', 0) if usage else 0

        return LLMResponse(
            text=response.choices[0].message.content or "",
            input_tokens=input_tokens,
            output_tokens=output_tokens
        )


class OpenRouterProvider(OpenAIProvider):
    """
    OpenRouter provider.

    OpenRouter speaks the OpenAI chat completions protocol, so this is the
    OpenAI client pointed at https://openrouter.ai/api/v1 with
    OPENROUTER_API_KEY.
    """

    name = "openrouter"


class ClaudeProvider(LLMProvider):
    """Anthropic Claude provider."""

    name = "claude"

    def __init__(self, config: LLMConfig):
        self.config = config
        self._client = None
        self._init_client()

    def _init_client(self):
        if not self.config.api_key:
            return
        try:
            import anthropic
            self._client = anthropic.Anthropic(api_key=self.config.api_key)
        except ImportError:
            pass

    @property
    def is_available(self) -> bool:
        return self._client is not None

    def complete(self, system: str, user: str, max_tokens: int = 2048) -> LLMResponse:
        if not self._client:
            raise RuntimeError("Claude client not initialized")

        message = self._client.messages.create(
            model=self.config.effective_model,
            max_tokens=max_tokens,
            system=system,
            messages=[{"role": "user", "content": user}]
        )

        # Extract token usage from response
        input_tokens = getattr(message.usage, 'input_tokens', 0)
        output_tokens = getattr(message.usage, 'output_tokens', 0)

        return LLMResponse(
            text=message.content[0].text,
            input_tokens=input_tokens,
            output_tokens=output_tokens
        )


class MockProvider(LLMProvider):
    """Stand-in when no provider is configured. Answers every document with a fixed verdict."""

    name = "mock"

    def __init__(self, text: str = "Yes — mock provider, no classifier configured."):
        self.text = text
        self.calls = 0

    @property
    def is_available(self) -> bool:
        return True

    def complete(self, system: str, user: str, max_tokens: int = 2048) -> LLMResponse:
        self.calls += 1
        return LLMResponse(text=self.text, input_tokens=0, output_tokens=0)


PROVIDER_CLASSES = {
    "openrouter": OpenRouterProvider,
    "openai": OpenAIProvider,
    "claude": ClaudeProvider,
}


def get_provider(config: Config) -> LLMProvider:
    """
    Get LLM provider based on configuration.

    Args:
        config: Application configuration

    Returns:
        Configured provider, or MockProvider if none available
    """
    provider_class = PROVIDER_CLASSES.get(config.llm.provider)
    if provider_class is not None:
        provider = provider_class(config.llm)
        if provider.is_available:
            return provider

    # Fall back to mock if no provider available
    return MockProvider()


def get_provider_status(config: Config) -> str:
    """Get human-readable provider status."""
    llm = config.llm
    provider = get_provider(config)

    if isinstance(provider, MockProvider):
        return f"{llm.provider}: not configured (set {llm.api_key_env})"
    return f"{llm.provider}: {llm.effective_model}"
