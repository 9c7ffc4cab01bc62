"""
llm_utils.py - LLM utilities and provider management

This module provides LLM invocation functionality with support for
Gemini, DeepSeek, Ollama, and OpenAI-compatible providers.
"""

import logging
import os
import re
from typing import List, Optional

from google import genai
from google.genai import types as genai_types
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_deepseek import ChatDeepSeek
from langchain_deepseek.chat_models import DEFAULT_API_BASE as DEEPSEEK_DEFAULT_API_BASE
from langchain_ollama import OllamaLLM
from langchain_openai import ChatOpenAI

_LOG = logging.getLogger("llm_utils")

# Default configuration
DEFAULT_LLM_PROVIDER = "gemini"  # "gemini", "deepseek", "ollama", or "openai"
DEFAULT_GEMINI_MODEL = "gemma-3-27b-it"
DEFAULT_DEEPSEEK_MODEL = "deepseek-chat"
DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "qwen3:8b"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
SUPPORTED_PROVIDERS = ("gemini", "deepseek", "ollama", "openai")


class LLMProvider:
    """LLM provider configuration and management."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        provider: str = DEFAULT_LLM_PROVIDER,
        model: Optional[str] = None,
        temperature: float = 0.1,
        timeout: int = 30,
        max_retries: int = 1,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.provider = provider.lower()
        self.model = model
        self.temperature = temperature
        self.timeout = timeout
        self.max_retries = max_retries

        if self.provider not in SUPPORTED_PROVIDERS:
            raise ValueError(f"Unsupported LLM provider: {provider}")

        self._configure_provider()

    def _configure_provider(self):
        """Fill in provider defaults from the environment."""
        if self.provider == "ollama":
            if not self.base_url:
                self.base_url = os.getenv("OLLAMA_BASE_URL", DEFAULT_OLLAMA_BASE_URL)
            if not self.model:
                self.model = os.getenv("OLLAMA_MODEL", DEFAULT_OLLAMA_MODEL)
        elif self.provider == "openai":
            if not self.api_key:
                self.api_key = os.getenv("OPENAI_API_KEY")
            if not self.base_url:
                self.base_url = os.getenv("OPENAI_API_BASE", "https://api.openai.com/v1")
            if not self.model:
                self.model = os.getenv("OPENAI_MODEL", DEFAULT_OPENAI_MODEL)
        elif self.provider == "deepseek":
            if not self.api_key:
                self.api_key = os.getenv("DEEPSEEK_API_KEY")
            if not self.model:
                self.model = DEFAULT_DEEPSEEK_MODEL
        else:  # gemini
            if not self.api_key:
                self.api_key = os.getenv("GEMINI_API_KEY")
            if not self.model:
                self.model = DEFAULT_GEMINI_MODEL

    def get_llm(self):
        """Get the configured langchain LLM instance (not used for Gemini)."""
        if self.provider == "ollama":
            _LOG.debug("Using Ollama provider: %s at %s", self.model, self.base_url)
            return OllamaLLM(
                model=self.model,
                base_url=self.base_url,
                temperature=self.temperature,
            )
        elif self.provider == "openai":
            if not self.api_key:
                raise ValueError(
                    "OpenAI API key required. Set OPENAI_API_KEY environment variable or pass api_key"
                )
            _LOG.debug("Using OpenAI-compatible provider: %s at %s", self.model, self.base_url)
            return ChatOpenAI(
                model=self.model,
                api_key=self.api_key,
                base_url=self.base_url,
                temperature=self.temperature,
                timeout=self.timeout,
                max_retries=self.max_retries,
            )
        elif self.provider == "deepseek":
            if not self.api_key:
                raise ValueError(
                    "DeepSeek API key required. Set DEEPSEEK_API_KEY environment variable or pass api_key"
                )
            _LOG.debug("Using DeepSeek provider: %s", self.model)
            return ChatDeepSeek(
                model=self.model,
                temperature=self.temperature,
                timeout=self.timeout,
                max_retries=self.max_retries,
                api_key=self.api_key,
                api_base=self.base_url if self.base_url else DEEPSEEK_DEFAULT_API_BASE,
            )
        raise ValueError(f"Provider {self.provider} has no langchain client")

    def invoke(self, messages: List[BaseMessage], **kwargs) -> AIMessage:
        """Invoke LLM with the configured provider."""
        if self.provider == "gemini":
            return self._invoke_gemini(messages)

        llm = self.get_llm()
        if self.provider == "ollama":
            # OllamaLLM is a plain text completion model
            response = llm.invoke(messages_to_prompt(messages))
            return AIMessage(content=clean_think_tags(response))
        return llm.invoke(messages)

    def _invoke_gemini(self, messages: List[BaseMessage]) -> AIMessage:
        if not self.api_key:
            raise ValueError(
                "Gemini API key required. Set GEMINI_API_KEY environment variable or pass api_key"
            )
        _LOG.debug("Using Gemini provider: %s", self.model)
        client = genai.Client(
            api_key=self.api_key,
            http_options=genai_types.HttpOptions(timeout=int(self.timeout * 1000)),
        )
        response = client.models.generate_content(
            model=self.model,
            contents=messages_to_prompt(messages),
            config=genai_types.GenerateContentConfig(temperature=self.temperature),
        )
        return AIMessage(content=response.text or "")


def llm_invoke(
    messages: List[BaseMessage],
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    provider: str = DEFAULT_LLM_PROVIDER,
    model: Optional[str] = None,
    **kwargs,
) -> AIMessage:
    """Invoke LLM with support for Gemini, DeepSeek, Ollama, and OpenAI-compatible providers."""
    llm_provider = LLMProvider(
        api_key=api_key, base_url=base_url, provider=provider, model=model, **kwargs
    )
    return llm_provider.invoke(messages)


def messages_to_prompt(messages: List[BaseMessage]) -> str:
    """Flatten a conversation into a single text prompt."""
    if len(messages) == 1:
        return str(messages[0].content)
    return "\n\n".join(
        f"{'User' if isinstance(m, HumanMessage) else 'Assistant'}: {m.content}"
        for m in messages
    )


def clean_think_tags(content: str) -> str:
    """Remove <think>...</think> blocks some local models emit."""
    return re.sub(r"<think>.*?</think>", "", content, flags=re.DOTALL)
