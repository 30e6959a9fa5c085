"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 适配器协议 (base)。
- 维护 Provider 端点与生成参数 (registry)。
- 提供各厂商的具体实现 (gemini_client、openai_client)。
"""

from typing import Optional

from support_agent.config.credentials import Credentials
from support_agent.config.settings import settings
from support_agent.domain.exceptions import ValidationError
from support_agent.providers.base import ProviderAdapter
from support_agent.providers.gemini_client import GeminiClient
from support_agent.providers.openai_client import OpenAIClient


def create_provider(name: Optional[str] = None, credentials: Optional[Credentials] = None) -> ProviderAdapter:
    """根据名称创建 Provider 实例，默认取配置中的 provider。"""

    provider_name = (name or getattr(settings, "default_provider", "gemini")).lower()
    if provider_name == "gemini":
        return GeminiClient(settings, credentials)
    if provider_name == "openai":
        return OpenAIClient(settings, credentials)
    raise ValidationError(code="UNKNOWN_PROVIDER", message=f"Unknown provider: {provider_name!r}")
