"""
Services — Classifier providers and project health analysis
"""

from .providers import (
    LLMProvider, LLMResponse, OpenRouterProvider, OpenAIProvider,
    ClaudeProvider, MockProvider, get_provider, get_provider_status,
)

__all__ = [
    'LLMProvider', 'LLMResponse', 'OpenRouterProvider', 'OpenAIProvider',
    'ClaudeProvider', 'MockProvider', 'get_provider', 'get_provider_status',
]
