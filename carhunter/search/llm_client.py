import logging

import openai
from openai import OpenAI

from carhunter.core.config import SETTINGS, Settings


logger = logging.getLogger(__name__)


class LlmSearchError(Exception):
    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LlmConfigurationError(RuntimeError):
    pass


class PerplexityClient:
    def __init__(self, settings: Settings = SETTINGS, *, client: OpenAI | None = None) -> None:
        self._model = settings.perplexity_model
        self._client = client
        if self._client is None and settings.perplexity_api_key:
            self._client = OpenAI(
                api_key=settings.perplexity_api_key,
                base_url=settings.perplexity_base_url,
                timeout=settings.llm_timeout_seconds,
                max_retries=settings.llm_max_retries,
            )

    def search(self, prompt: str) -> str:
        if self._client is None:
            raise LlmConfigurationError("Perplexity API key not configured")

        try:
            completion = self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.APIStatusError as exc:
            logger.warning("Perplexity request failed with HTTP %s", exc.status_code)
            raise LlmSearchError(f"Perplexity API error: {exc.status_code}", status_code=exc.status_code) from exc
        except openai.APIConnectionError as exc:
            logger.warning("Perplexity request failed: %s", exc)
            raise LlmSearchError(f"Perplexity API unreachable: {exc}") from exc
        except openai.OpenAIError as exc:
            logger.warning("Perplexity request failed: %s", exc)
            raise LlmSearchError(f"Perplexity API error: {exc}") from exc

        choices = completion.choices or []
        content = choices[0].message.content if choices else None
        if not content or not content.strip():
            raise LlmSearchError("No content received from Perplexity API")

        logger.info("Perplexity returned %s characters of content", len(content))
        return content
