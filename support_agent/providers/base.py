"""Provider 适配器协议。

会话层不直接依赖具体厂商的 HTTP 接口，而是依赖此协议：

- 每个厂商实现一个适配器（GeminiClient、OpenAIClient）。
- 负责：将 Conversation + 新的用户输入转成厂商请求体，并把响应 JSON 归一为回复文本。

适配器在两次调用之间不保存任何状态，完整会话每次都由调用方传入。
"""

from typing import Protocol

from support_agent.domain.models import Conversation


class ProviderAdapter(Protocol):
    """LLM Provider 适配器协议。

    实现者需要提供：
    - name: Provider 名称，用于日志/展示。
    - respond(history, user_text, is_first_turn): 执行一次非流式调用，返回回复文本；
      失败时抛出 ProviderError 子类。
    """

    name: str

    def respond(self, history: Conversation, user_text: str, is_first_turn: bool = False) -> str:
        ...
