"""Length-controlled summarization with multi-platform LLM support (Gemini, Groq, OpenRouter)."""

import asyncio
from typing import Dict, Optional, Union

import httpx

from summarizer.core.config import settings
from summarizer.core.exceptions import GenerationFailed
from summarizer.schemas import LengthMode, ResolvedContent, SummaryResult

# Platform configurations
PLATFORMS: Dict[str, Dict] = {
    "gemini": {
        "url": "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent",
        "key_setting": "GEMINI_API_KEY",
        "model_setting": "GEMINI_MODEL",
        "style": "gemini",
    },
    "groq": {
        "url": "https://api.groq.com/openai/v1/chat/completions",
        "key_setting": "GROQ_API_KEY",
        "model_setting": "GROQ_MODEL",
        "style": "openai",
    },
    "openrouter": {
        "url": "https://openrouter.ai/api/v1/chat/completions",
        "key_setting": "OPENROUTER_API_KEY",
        "model_setting": "OPENROUTER_MODEL",
        "style": "openai",
    },
}

LENGTH_INSTRUCTIONS: Dict[LengthMode, str] = {
    LengthMode.SHORT: "very concise, 2-3 sentences",
    LengthMode.MEDIUM: "comprehensive, 4-6 sentences",
    LengthMode.LONG: "detailed, covering all main points (approximately 8-10 sentences)",
}

SUMMARY_DIRECTIVES = (
    "- Preserve the key ideas, concepts, and conclusions.\n"
    "- Preserve the original tone of the content.\n"
    "- Produce a coherent, readable summary."
)


def length_instruction(mode: Union[LengthMode, str, None]) -> str:
    return LENGTH_INSTRUCTIONS[LengthMode.parse(mode)]


def build_prompt(content: ResolvedContent, mode: Union[LengthMode, str, None] = None) -> str:
    """Compose the single prompt sent to the model. Same input, same prompt."""
    return (
        f"Summarize the following content. The summary should be {length_instruction(mode)}.\n"
        f"{SUMMARY_DIRECTIVES}\n\n"
        f"Content:\n{content.text}"
    )


class SummarizationService:
    """Generate summaries via LLM APIs. Stateless: one model call per request."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._transport = transport

    def _get_platform_config(self, platform: str) -> dict:
        """Get URL, API key, model and request style for the given platform."""
        if platform not in PLATFORMS:
            raise GenerationFailed(
                f"Unknown platform '{platform}'. "
                f"Supported: {', '.join(PLATFORMS.keys())}"
            )

        config = PLATFORMS[platform]
        api_key = getattr(settings, config["key_setting"], None)
        model = getattr(settings, config["model_setting"])

        if not api_key:
            raise GenerationFailed(
                f"{config['key_setting']} is not set. "
                f"Add it to your .env file."
            )

        return {
            "url": config["url"].format(model=model),
            "api_key": api_key,
            "model": model,
            "style": config["style"],
        }

    def _build_request(self, config: dict, prompt: str) -> dict:
        """Build headers and JSON body for the platform's request style."""
        if config["style"] == "gemini":
            return {
                "headers": {
                    "x-goog-api-key": config["api_key"],
                    "Content-Type": "application/json",
                },
                "json": {"contents": [{"role": "user", "parts": [{"text": prompt}]}]},
            }

        return {
            "headers": {
                "Authorization": f"Bearer {config['api_key']}",
                "Content-Type": "application/json",
            },
            "json": {
                "model": config["model"],
                "messages": [{"role": "user", "content": prompt}],
            },
        }

    @staticmethod
    def _extract_text(style: str, data: dict) -> str:
        """Pull the generated text out of a platform response body."""
        try:
            if style == "gemini":
                candidates = data.get("candidates") or []
                if not candidates:
                    raise GenerationFailed("LLM returned no candidates in the response.")
                parts = candidates[0]["content"]["parts"]
                text = "".join(part.get("text", "") for part in parts)
            else:
                choices = data.get("choices") or []
                if not choices:
                    raise GenerationFailed("LLM returned no choices in the response.")
                text = choices[0]["message"]["content"]
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise GenerationFailed(f"Malformed LLM response: {e}", e) from e

        if not isinstance(text, str):
            raise GenerationFailed(f"Malformed LLM response: expected text, got {type(text).__name__}")
        if not text.strip():
            raise GenerationFailed("LLM returned an empty summary.")
        return text

    async def _call_llm(self, config: dict, prompt: str) -> str:
        """POST the prompt, retrying on 429 up to LLM_MAX_RETRIES times."""
        request = self._build_request(config, prompt)
        max_retries = max(settings.LLM_MAX_RETRIES, 0)

        for attempt in range(max_retries + 1):
            try:
                async with httpx.AsyncClient(
                    timeout=settings.LLM_TIMEOUT_SECONDS, transport=self._transport
                ) as client:
                    response = await client.post(config["url"], **request)
            except httpx.TimeoutException as e:
                raise GenerationFailed(
                    f"LLM request timed out after {settings.LLM_TIMEOUT_SECONDS:g}s", e
                ) from e
            except httpx.HTTPError as e:
                raise GenerationFailed(f"LLM request failed: {e}", e) from e

            if response.status_code == 200:
                try:
                    data = response.json()
                except ValueError as e:
                    raise GenerationFailed("LLM returned a malformed body.", e) from e
                return self._extract_text(config["style"], data)

            if response.status_code == 429 and attempt < max_retries:
                delay = settings.LLM_RETRY_BASE_DELAY * (2 ** attempt)
                await asyncio.sleep(delay)
                continue

            # Non-retryable or exhausted retries
            raise GenerationFailed(
                f"LLM API returned {response.status_code}: {response.text[:500]}"
            )

    async def generate(
        self,
        content: ResolvedContent,
        mode: Union[LengthMode, str, None] = None,
        platform: Optional[str] = None,
    ) -> SummaryResult:
        """
        Summarize resolved content.

        Args:
            content: Canonical text (and optional video metadata) to summarize.
            mode: 'short', 'medium' or 'long'. Absent or unknown means medium.
            platform: 'gemini', 'groq' or 'openrouter'. Defaults to DEFAULT_LLM_PLATFORM.
        """
        platform = platform or settings.DEFAULT_LLM_PLATFORM
        config = self._get_platform_config(platform)
        prompt = build_prompt(content, mode)
        text = await self._call_llm(config, prompt)
        return SummaryResult(text=text)


# Singleton instance
summarization_service = SummarizationService()
