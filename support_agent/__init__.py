"""Support Agent 顶层包。

技术支持培训用的聊天助手：把会话转发给 Gemini 或 OpenAI，
累积对话记录，并可选地朗读回复。
"""

from support_agent.agents.support_session import ChatSession
from support_agent.providers import create_provider

__all__ = ["ChatSession", "create_provider"]
