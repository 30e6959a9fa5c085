"""Gemini Provider 适配器。

本模块负责：

1. 将 Conversation 映射为 generateContent 的 contents 列表（role/parts）。
2. 首轮调用时用人设指令替换整段 contents。
3. 调用 HTTP 接口（API Key 走 query 参数 ?key=）。
4. 从 candidates[0].content.parts[0].text 取出回复文本，原样返回。
"""

from typing import Any, Dict, Optional

from support_agent.config.credentials import Credentials
from support_agent.config.settings import settings
from support_agent.domain.models import Conversation, Turn
from support_agent.infrastructure.logging.logger import logger
from support_agent.prompts import PERSONA_DIRECTIVE
from support_agent.providers.registry import GEMINI_CONFIG
from support_agent.providers.schemas import GeminiResponse
from support_agent.providers.transport import decode_response, post_json


# 内部角色 -> Gemini 角色
ROLE_MAP = {"user": "user", "agent": "model"}


class GeminiClient:
    """Gemini 提供方客户端实现。"""

    name = GEMINI_CONFIG.name

    def __init__(self, cfg=settings, credentials: Optional[Credentials] = None):
        self._settings = cfg
        self._credentials = credentials or Credentials.from_settings(cfg)

    def respond(self, history: Conversation, user_text: str, is_first_turn: bool = False) -> str:
        """执行一次 generateContent 调用并返回回复文本。

        失败时抛出 ConfigurationError / TransportError / HttpFailure / MalformedResponse。
        """

        api_key = self._credentials.require(self.name)
        payload = self.build_payload(history, user_text, is_first_turn)
        base = (getattr(self._settings, "gemini_base_url", None) or GEMINI_CONFIG.base_url).rstrip("/")
        model = getattr(self._settings, "gemini_model", None) or GEMINI_CONFIG.model
        logger.info(
            "gemini generateContent",
            extra={"extra": {"provider": self.name, "model": model, "contents": len(payload["contents"])}},
        )
        data = post_json(
            self.name,
            f"{base}/models/{model}:generateContent",
            payload,
            headers={"Content-Type": "application/json"},
            params={"key": api_key},
            timeout=getattr(self._settings, "http_timeout", None),
        )
        return decode_response(self.name, data, GeminiResponse).text

    def build_payload(self, history: Conversation, user_text: str, is_first_turn: bool = False) -> Dict[str, Any]:
        """将会话快照与新输入转成 generateContent 请求 JSON。"""

        if is_first_turn:
            # 首轮只发送人设指令 + 用户输入，传入的 history 整体丢弃
            if history:
                logger.info(
                    "first turn discards prior history",
                    extra={"extra": {"provider": self.name, "discarded": len(history)}},
                )
            contents = [_user_content(PERSONA_DIRECTIVE), _user_content(user_text)]
        else:
            contents = [self._turn_to_content(t) for t in history]
            contents.append(_user_content(user_text))

        gen = GEMINI_CONFIG.generation
        return {
            "contents": contents,
            "generationConfig": {
                "temperature": gen.temperature,
                "topK": gen.top_k,
                "topP": gen.top_p,
                "maxOutputTokens": gen.max_output_tokens,
            },
        }

    @staticmethod
    def _turn_to_content(turn: Turn) -> Dict[str, Any]:
        return {"role": ROLE_MAP[turn.role], "parts": [{"text": turn.text}]}


def _user_content(text: str) -> Dict[str, Any]:
    return {"role": "user", "parts": [{"text": text}]}
