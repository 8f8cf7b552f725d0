import logging

from healthbuddy.application.ports import LLMPort
from healthbuddy.infrastructure.config import Settings


logger = logging.getLogger(__name__)


class MistralLLMAdapter(LLMPort):
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self._client = None
        self._model = self.settings.mistral_model
        self._init_client()

    def _init_client(self):
        api_key = self.settings.mistral_api_key
        if not api_key:
            logger.error("Mistral API key is missing.")
            self._client = None
            return
        try:
            from mistralai import Mistral
            self._client = Mistral(
                api_key=api_key,
                timeout_ms=int(self.settings.http_timeout * 1000),
            )
        except Exception as e:
            logger.exception("Failed to initialize Mistral client: %s", e)
            self._client = None

    async def generate_text(self, prompt: str) -> str:
        if not self._client:
            raise RuntimeError("Mistral client not initialized (missing API key or import error)")
        try:
            response = await self._client.chat.complete_async(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
            )
            content = response.choices[0].message.content
        except Exception as e:
            logger.exception("Mistral chat call failed: %s", e)
            raise
        return _content_text(content)


def _content_text(content) -> str:
    if isinstance(content, str):
        return content
    # Chunked replies: keep the text chunks, skip images and references
    parts = []
    for chunk in content or []:
        text = chunk.get("text") if isinstance(chunk, dict) else getattr(chunk, "text", None)
        if isinstance(text, str):
            parts.append(text)
    if not parts:
        raise RuntimeError("Mistral reply contained no text content")
    return "".join(parts)
