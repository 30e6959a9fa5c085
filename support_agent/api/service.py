"""对外 API 服务模块。

提供简化的函数接口供 UI 调用。
"""

from typing import Any, Dict, List, Optional

from support_agent.agents.support_session import ChatSession, display_name
from support_agent.config.credentials import Credentials, DISPLAY_NAMES
from support_agent.config.settings import settings
from support_agent.infrastructure.logging.logger import logger
from support_agent.infrastructure.speech import default_speaker
from support_agent.providers import create_provider
from support_agent.providers.registry import PROVIDER_REGISTRY


_session: Optional[ChatSession] = None


def get_default_session() -> ChatSession:
    """获取默认的技术支持会话实例（单例）。"""
    global _session
    if _session is None:
        credentials = Credentials.from_settings(settings)
        for name in PROVIDER_REGISTRY:
            if not credentials.is_configured(name):
                logger.warning(f"{name} API key is not configured", extra={"extra": {"provider": name}})
        _session = ChatSession(
            providers={name: create_provider(name, credentials) for name in PROVIDER_REGISTRY},
            credentials=credentials,
            speaker=default_speaker(),
            voice_enabled=settings.voice_enabled,
            default_provider=settings.default_provider,
        )
    return _session


def run_support_chat(user_input: str, provider: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """发送一条消息。

    Args:
        user_input: 用户输入内容
        provider: Provider 名（gemini / openai），默认取配置

    Returns:
        包含用户消息、助手消息和错误信息的字典；空白输入返回 None

    Raises:
        ValidationError: Provider 未知或会话仍在等待上一条回复
    """
    session = get_default_session()
    exchange = session.send(user_input, provider or settings.default_provider)
    if exchange is None:
        return None
    return {
        "user_message": {"role": exchange.user_turn.role, "content": exchange.user_turn.text},
        "assistant_message": {
            "role": exchange.reply.role,
            "content": exchange.reply.text,
            "provider": exchange.reply.provider,
            "label": display_name(exchange.reply),
        },
        "error": None if exchange.error is None else {
            "kind": exchange.error.kind,
            "code": exchange.error.code,
            "message": exchange.error.message,
        },
        "stale": exchange.stale,
    }


def reset_chat(provider: Optional[str] = None) -> Dict[str, Any]:
    """重置会话，返回欢迎消息。"""
    welcome = get_default_session().reset(provider or settings.default_provider)
    return {"role": welcome.role, "content": welcome.text, "label": display_name(welcome)}


def set_voice_enabled(enabled: bool) -> None:
    get_default_session().voice_enabled = enabled


def get_conversation_messages() -> List[Dict[str, Any]]:
    """获取当前会话的所有消息。"""
    return [
        {"role": t.role, "content": t.text, "provider": t.provider, "label": display_name(t)}
        for t in get_default_session().history
    ]


def key_status(provider: str) -> str:
    """UI 上的密钥状态徽标文本。"""
    display = DISPLAY_NAMES.get(provider.lower(), provider)
    if Credentials.from_settings(settings).is_configured(provider):
        return f"✓ {display} Key Set"
    return f"✗ {display} Key Missing"
