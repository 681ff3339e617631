"""
Completion service boundary.

Sends a system instruction plus a user instruction (optionally with one
inline image) and returns the raw text. Parsing is left to the normalizer.
Provider errors are surfaced as UpstreamFailure; nothing is retried.
"""
from typing import Optional

import httpx
import openai
from openai import AsyncOpenAI

from chefgpt.core.config import Settings
from chefgpt.core.exceptions import UpstreamFailure
from chefgpt.core.logger import logger, log_ai_call, log_error


class CompletionClient:
    """Thin async wrapper over the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: str,
        model: str,
        timeout: float = 90.0,
        json_mode: bool = True,
        client: Optional[AsyncOpenAI] = None
    ):
        self.model = model
        self.json_mode = json_mode
        # Stalled responses must not hang a worker
        self.timeout = httpx.Timeout(timeout, connect=10.0)
        self._client = client or AsyncOpenAI(api_key=api_key, max_retries=0)

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionClient":
        return cls(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            timeout=settings.OPENAI_TIMEOUT,
            json_mode=settings.OPENAI_JSON_MODE,
        )

    async def _create(self, operation: str, messages: list[dict], temperature: float) -> str:
        log_ai_call(operation, self.model)

        kwargs = {}
        if self.json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                timeout=self.timeout,
                **kwargs,
            )
        except openai.OpenAIError as e:
            log_error(operation, e)
            raise UpstreamFailure(f"Completion service error: {e}", reason=str(e)) from e

        content = response.choices[0].message.content or ""
        logger.info(f"{operation} call successful ({len(content)} chars)")
        return content

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7
    ) -> str:
        """
        Run a text-only completion.

        Args:
            system_prompt: Persona/system instruction
            user_prompt: User instruction
            temperature: Model temperature

        Returns:
            Raw response text

        Raises:
            UpstreamFailure: If the provider call fails
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt}
        ]
        return await self._create("Chat API", messages, temperature)

    async def complete_with_image(
        self,
        system_prompt: str,
        user_prompt: str,
        image_base64: str,
        temperature: float = 0.4
    ) -> str:
        """
        Run a completion with one base64-encoded JPEG attached.

        Raises:
            UpstreamFailure: If the provider call fails
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": user_prompt},
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:image/jpeg;base64,{image_base64}"}
                    }
                ]
            }
        ]
        return await self._create("Vision API", messages, temperature)
