# ingres/llm/multi_model_client.py

import logging
import time
from typing import Callable, Dict, List, Optional, Tuple

import requests
import google.generativeai as genai
from openai import OpenAI

from ingres.config import (
    GEMINI_API_KEY,
    GEMINI_MODEL,
    HTTP_TIMEOUT_SECONDS,
    LLM_MAX_TOKENS,
    LLM_TEMPERATURE,
    LLM_TOP_K,
    LLM_TOP_P,
    OPENAI_API_KEY,
    OPENAI_MODEL,
    POLLINATIONS_URL,
    SAFETY_CATEGORIES,
    SAFETY_THRESHOLD,
)
from ingres.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class MultiModelLLMClient:
    """
    Multi-provider text generation.

    Fallback order:

    1. Gemini (primary)
    2. OpenAI (when a key is configured)
    3. Pollinations text endpoint (keyless, chat only)

    `generate` uses the hosted models only and raises when none answer;
    `generate_chat` adds the keyless endpoint and raises UpstreamError
    only when every provider failed.
    """

    def __init__(
        self,
        gemini_api_key: Optional[str] = GEMINI_API_KEY,
        openai_api_key: Optional[str] = OPENAI_API_KEY,
        pollinations_url: Optional[str] = POLLINATIONS_URL,
    ):

        self.gemini_model = None
        self.openai: Optional[OpenAI] = None
        self.pollinations_url = pollinations_url

        self.gemini_available = False
        self.openai_available = False
        self.pollinations_available = bool(pollinations_url)

        self._init_gemini(gemini_api_key)
        self._init_openai(openai_api_key)

        logger.info(
            "LLM initialization complete",
            extra=self.get_usage_stats(),
        )

    # ============================================================
    # INITIALIZATION
    # ============================================================

    def _init_gemini(self, key: Optional[str]):

        if not key:
            logger.warning("Gemini API key missing")
            return

        try:

            genai.configure(api_key=key)

            self.gemini_model = genai.GenerativeModel(
                model_name=GEMINI_MODEL,
                generation_config={
                    "temperature": LLM_TEMPERATURE,
                    "top_k": LLM_TOP_K,
                    "top_p": LLM_TOP_P,
                    "max_output_tokens": LLM_MAX_TOKENS,
                },
                safety_settings=[
                    {"category": category, "threshold": SAFETY_THRESHOLD}
                    for category in SAFETY_CATEGORIES
                ],
            )

            self.gemini_available = True

            logger.info("Gemini initialized successfully")

        except Exception as e:

            logger.error(
                "Gemini initialization failed",
                extra={"error": str(e)},
            )

    def _init_openai(self, key: Optional[str]):

        if not key:
            logger.info("OpenAI API key not set, provider skipped")
            return

        try:

            self.openai = OpenAI(api_key=key)

            self.openai_available = True

            logger.info("OpenAI initialized successfully")

        except Exception as e:

            logger.error(
                "OpenAI initialization failed",
                extra={"error": str(e)},
            )

    # ============================================================
    # PUBLIC API
    # ============================================================

    def generate(self, prompt: str) -> str:
        """Single-prompt generation through the hosted models."""

        providers = []

        if self.gemini_available:
            providers.append(("gemini", lambda: self._generate_gemini(prompt)))

        if self.openai_available:
            providers.append(("openai", lambda: self._generate_openai(None, prompt)))

        if not providers:
            raise ConfigurationError("Gemini API key not configured")

        return self._run_chain(providers, prompt_length=len(prompt))

    def generate_chat(self, system_prompt: str, message: str) -> str:
        """Persona chat: system prompt plus the user's message."""

        providers = []

        if self.gemini_available:
            providers.append((
                "gemini",
                lambda: self._generate_gemini(f"{system_prompt}\n\nUser message: {message}"),
            ))

        if self.openai_available:
            providers.append((
                "openai",
                lambda: self._generate_openai(system_prompt, message),
            ))

        if self.pollinations_available:
            providers.append((
                "pollinations",
                lambda: self._generate_pollinations(system_prompt, message),
            ))

        if not providers:
            raise ConfigurationError("No language model provider configured")

        return self._run_chain(
            providers,
            prompt_length=len(system_prompt) + len(message),
        )

    # ============================================================
    # FALLBACK CHAIN
    # ============================================================

    def _run_chain(
        self,
        providers: List[Tuple[str, Callable[[], str]]],
        prompt_length: int,
    ) -> str:

        logger.info(
            "LLM request started",
            extra={
                "providers": [name for name, _ in providers],
                "prompt_length": prompt_length,
            },
        )

        errors = []

        for name, call in providers:

            try:

                return self._timed_call(name, call)

            except Exception as e:

                errors.append(f"{name}: {e}")

                logger.warning(
                    f"{name} failed",
                    extra={"provider": name, "error": str(e)},
                )

        raise UpstreamError("All language model providers failed: " + "; ".join(errors))

    def _timed_call(self, provider: str, fn: Callable[[], str]) -> str:

        start = time.time()

        result = fn()

        latency = time.time() - start

        logger.info(
            "LLM provider success",
            extra={
                "provider": provider,
                "latency_seconds": round(latency, 3),
            },
        )

        return result

    # ============================================================
    # PROVIDERS
    # ============================================================

    def _generate_gemini(self, prompt: str) -> str:

        response = self.gemini_model.generate_content(prompt)

        if not response or not response.text:
            raise UpstreamError("Gemini returned empty response")

        return response.text.strip()

    def _generate_openai(self, system_prompt: Optional[str], message: str) -> str:

        messages = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": message})

        response = self.openai.chat.completions.create(
            model=OPENAI_MODEL,
            messages=messages,
            temperature=LLM_TEMPERATURE,
            top_p=LLM_TOP_P,
            max_tokens=LLM_MAX_TOKENS,
        )

        text = response.choices[0].message.content

        if not text:
            raise UpstreamError("OpenAI returned empty response")

        return text.strip()

    def _generate_pollinations(self, system_prompt: str, message: str) -> str:

        resp = requests.post(
            self.pollinations_url,
            json={
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": message},
                ],
                "model": "openai",
            },
            timeout=HTTP_TIMEOUT_SECONDS,
        )

        if not resp.ok:
            raise UpstreamError(f"Pollinations failed with status: {resp.status_code}")

        return resp.text

    # ============================================================
    # STATUS
    # ============================================================

    def get_usage_stats(self) -> Dict:

        return {
            "gemini_available": self.gemini_available,
            "openai_available": self.openai_available,
            "pollinations_available": self.pollinations_available,
        }
