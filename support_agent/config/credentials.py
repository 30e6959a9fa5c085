"""Provider 密钥的显式配置结构。

启动时由 Settings 构造一次，之后作为参数传给适配器，
不在调用过程中再去隐式读取环境变量。
"""

from dataclasses import dataclass
from typing import Dict, Optional

from support_agent.domain.exceptions import ConfigurationError, ValidationError


# .env.example 中的占位值，视同未配置
PLACEHOLDER_KEYS: Dict[str, str] = {
    "gemini": "your_gemini_api_key_here",
    "openai": "your_openai_api_key_here",
}

DISPLAY_NAMES: Dict[str, str] = {
    "gemini": "Gemini",
    "openai": "OpenAI",
}


@dataclass(frozen=True)
class Credentials:
    gemini_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None

    @classmethod
    def from_settings(cls, cfg) -> "Credentials":
        return cls(
            gemini_api_key=getattr(cfg, "gemini_api_key", None),
            openai_api_key=getattr(cfg, "openai_api_key", None),
        )

    def key_for(self, provider: str) -> Optional[str]:
        name = provider.lower()
        if name == "gemini":
            return self.gemini_api_key
        if name == "openai":
            return self.openai_api_key
        raise ValidationError(code="UNKNOWN_PROVIDER", message=f"Unknown provider: {provider!r}")

    def is_configured(self, provider: str) -> bool:
        key = self.key_for(provider)
        if not key or not key.strip():
            return False
        return key.strip() != PLACEHOLDER_KEYS.get(provider.lower())

    def require(self, provider: str) -> str:
        """返回已配置的密钥；缺失或为占位值时抛出 ConfigurationError。"""

        if not self.is_configured(provider):
            display = DISPLAY_NAMES.get(provider.lower(), provider)
            raise ConfigurationError(
                message=f"{display} API key is not set. Please add your API key to the .env file.",
                provider=provider.lower(),
            )
        return self.key_for(provider).strip()
