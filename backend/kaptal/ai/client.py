import logging
import os
from typing import Any, Dict, Optional

import litellm

from kaptal.config import settings

logger = logging.getLogger(__name__)

litellm.drop_params = True

_PROVIDER_KEY_ENV = {
    "openrouter": "OPENROUTER_API_KEY",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


class AIClient:

    def __init__(self):
        self.provider = settings.ai_provider
        self.model = self._get_model_string()
        self.api_base = self._get_api_base()

    def _get_model_string(self) -> str:
        model = settings.ai_model

        if self.provider in ("openrouter", "ollama"):
            prefix = f"{self.provider}/"
            if not model.startswith(prefix):
                return f"{prefix}{model}"
        return model

    def _get_api_base(self) -> Optional[str]:
        if self.provider == "openrouter":
            return "https://openrouter.ai/api/v1"
        if self.provider == "ollama":
            return settings.ai_base_url or "http://localhost:11434"
        return settings.ai_base_url

    def _get_api_key(self) -> Optional[str]:
        if self.provider == "openrouter":
            return settings.openrouter_api_key
        if self.provider == "anthropic":
            return settings.anthropic_api_key
        if self.provider == "openai":
            return settings.openai_api_key
        return None

    @property
    def is_configured(self) -> bool:
        """Ollama runs locally without a key; every other provider needs one."""
        return self.provider == "ollama" or bool(self._get_api_key())

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int = 800,
    ) -> str:
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if self.api_base:
            kwargs["api_base"] = self.api_base

        env_name = _PROVIDER_KEY_ENV.get(self.provider)
        api_key = self._get_api_key()

        try:
            if env_name and api_key:
                os.environ[env_name] = api_key

            response = await litellm.acompletion(**kwargs)
            return response.choices[0].message.content
        except Exception as e:
            logger.error(f"AI completion error: {e}")
            raise
        finally:
            if env_name and api_key:
                os.environ.pop(env_name, None)


_ai_client: Optional[AIClient] = None

def get_ai_client() -> AIClient:
    global _ai_client
    if _ai_client is None:
        _ai_client = AIClient()
    return _ai_client
