"""Provider 与生成参数配置。

每个 Provider 的默认端点、模型 ID 以及固定的生成参数集中配置在这里；
Settings 中的 base_url / model 可以覆盖端点与模型，生成参数不对外开放。"""

from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class GenerationConfig:
    """单次调用的生成参数。top_k / top_p 为 None 时不下发。"""

    temperature: float
    max_output_tokens: int
    top_k: Optional[int] = None
    top_p: Optional[float] = None


@dataclass(frozen=True)
class ProviderConfig:
    """某个 Provider 的整体配置。"""

    name: str
    base_url: str
    model: str
    generation: GenerationConfig


# Gemini generateContent 配置
GEMINI_CONFIG = ProviderConfig(
    name="gemini",
    base_url="https://generativelanguage.googleapis.com/v1beta",
    model="gemini-2.0-flash",
    generation=GenerationConfig(temperature=0.7, max_output_tokens=500, top_k=40, top_p=0.95),
)

# OpenAI chat/completions 配置
OPENAI_CONFIG = ProviderConfig(
    name="openai",
    base_url="https://api.openai.com/v1",
    model="gpt-3.5-turbo",
    generation=GenerationConfig(temperature=0.7, max_output_tokens=500),
)


PROVIDER_REGISTRY: Mapping[str, ProviderConfig] = {
    "gemini": GEMINI_CONFIG,
    "openai": OPENAI_CONFIG,
}
