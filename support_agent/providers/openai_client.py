"""OpenAI Provider 适配器。

- URL: {base_url}/chat/completions
- 认证: Authorization: Bearer <api_key>

每次调用都在最前面放一条 system 人设消息，没有首轮的概念；
is_first_turn 参数仅为了与 GeminiClient 保持同一调用签名，这里忽略。
"""

from typing import Any, Dict, List, Optional

from support_agent.config.credentials import Credentials
from support_agent.config.settings import settings
from support_agent.domain.models import Conversation
from support_agent.infrastructure.logging.logger import logger
from support_agent.prompts import PERSONA_DIRECTIVE
from support_agent.providers.registry import OPENAI_CONFIG
from support_agent.providers.schemas import ChatCompletionResponse
from support_agent.providers.transport import decode_response, post_json


# 内部角色 -> OpenAI 角色
ROLE_MAP = {"user": "user", "agent": "assistant"}


class OpenAIClient:
    """OpenAI chat/completions 客户端实现。"""

    name = OPENAI_CONFIG.name

    def __init__(self, cfg=settings, credentials: Optional[Credentials] = None):
        self._settings = cfg
        self._credentials = credentials or Credentials.from_settings(cfg)

    def respond(self, history: Conversation, user_text: str, is_first_turn: bool = False) -> str:
        api_key = self._credentials.require(self.name)
        payload = self.build_payload(history, user_text)
        base = (getattr(self._settings, "openai_base_url", None) or OPENAI_CONFIG.base_url).rstrip("/")
        logger.info(
            "openai chat/completions",
            extra={"extra": {"provider": self.name, "model": payload["model"], "messages": len(payload["messages"])}},
        )
        data = post_json(
            self.name,
            f"{base}/chat/completions",
            payload,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=getattr(self._settings, "http_timeout", None),
        )
        return decode_response(self.name, data, ChatCompletionResponse).text

    def build_payload(self, history: Conversation, user_text: str) -> Dict[str, Any]:
        """system 人设 + 全部历史 + 新的用户输入。"""

        messages: List[Dict[str, str]] = [{"role": "system", "content": PERSONA_DIRECTIVE}]
        messages.extend({"role": ROLE_MAP[t.role], "content": t.text} for t in history)
        messages.append({"role": "user", "content": user_text})
        gen = OPENAI_CONFIG.generation
        return {
            "model": getattr(self._settings, "openai_model", None) or OPENAI_CONFIG.model,
            "messages": messages,
            "temperature": gen.temperature,
            "max_tokens": gen.max_output_tokens,
        }
