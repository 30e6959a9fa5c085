"""技术支持会话（调用方一侧）。

负责维护会话记录、按调用方选择的 Provider 分发请求、防止并发发送、
把调用中的任何错误转成一条 "Error: ..." 助手消息写回会话，并在需要时朗读回复。

适配器本身无状态，会话快照在每次 send 时整体传入。
"""

import threading
from typing import Dict, List, Mapping, Optional, Tuple

from support_agent.config.credentials import Credentials
from support_agent.domain.exceptions import ProviderError, TransportError, ValidationError
from support_agent.domain.models import Conversation, Exchange, Turn
from support_agent.infrastructure.logging.logger import logger
from support_agent.infrastructure.speech import NullSpeaker, SpeechOutput
from support_agent.prompts import WELCOME_MESSAGE
from support_agent.providers.base import ProviderAdapter


AGENT_LABEL = "Optimum Agent"
FALLBACK_ERROR_MESSAGE = (
    "There was an error connecting to the AI. Please check your network or try again later."
)


def display_name(turn: Turn) -> str:
    """UI 中消息的发言人标签。"""

    if turn.role == "user":
        return "You"
    return f"{AGENT_LABEL} ({turn.provider or 'AI'})"


def is_first_turn(history: Conversation) -> bool:
    """会话中还没有任何用户消息时视为首轮（欢迎语不计入）。"""

    return not any(t.role == "user" for t in history)


class ChatSession:
    """一次技术支持对话。

    Args:
        providers: Provider 名 -> 适配器实例。
        credentials: 启动时校验过的密钥配置。
        speaker: 语音输出，缺省不发声。
        voice_enabled: 是否朗读助手消息。
        default_provider: 欢迎语上标注的 Provider 名。
    """

    def __init__(
        self,
        providers: Mapping[str, ProviderAdapter],
        credentials: Credentials,
        speaker: Optional[SpeechOutput] = None,
        voice_enabled: bool = True,
        default_provider: str = "gemini",
        welcome_message: str = WELCOME_MESSAGE,
    ):
        self._providers: Dict[str, ProviderAdapter] = {k.lower(): v for k, v in providers.items()}
        self._credentials = credentials
        self._speaker = speaker or NullSpeaker()
        self._welcome = welcome_message
        self.voice_enabled = voice_enabled
        self._lock = threading.Lock()
        self._turns: List[Turn] = []
        self._busy = False
        # 每次 reset 自增，用于识别重置前发出的请求
        self._generation = 0
        self.reset(default_provider)

    @property
    def history(self) -> Tuple[Turn, ...]:
        with self._lock:
            return tuple(self._turns)

    @property
    def busy(self) -> bool:
        return self._busy

    def speak(self, text: str) -> None:
        if self.voice_enabled:
            self._speaker.speak(text)

    def reset(self, provider: Optional[str] = None) -> Turn:
        """停止朗读，清空会话，写入并朗读欢迎语。"""

        self._speaker.cancel()
        welcome = Turn(role="agent", text=self._welcome, provider=provider)
        with self._lock:
            self._generation += 1
            self._busy = False
            self._turns = [welcome]
        self.speak(welcome.text)
        return welcome

    def send(self, user_text: str, provider: str) -> Optional[Exchange]:
        """发送一条用户消息并等待回复。

        空白输入直接忽略并返回 None；有请求未完成时抛出 ValidationError(SESSION_BUSY)。
        调用过程中的任何错误都不会抛出，而是作为 "Error: ..." 助手消息写回会话；
        非 ProviderError 的异常包装为 TransportError。
        """

        if not user_text.strip():
            return None
        name = provider.lower()
        adapter = self._providers.get(name)
        if adapter is None:
            raise ValidationError(code="UNKNOWN_PROVIDER", message=f"Unknown provider: {provider!r}")

        with self._lock:
            if self._busy:
                raise ValidationError(code="SESSION_BUSY", message="A response is still pending")
            snapshot = tuple(self._turns)
            user_turn = Turn(role="user", text=user_text)
            self._turns.append(user_turn)
            self._busy = True
            generation = self._generation

        reply, error = self._dispatch(adapter, name, snapshot, user_text)

        with self._lock:
            stale = generation != self._generation
            if not stale:
                self._turns.append(reply)
                self._busy = False
        if stale:
            logger.info("dropped reply for a reset session", extra={"extra": {"provider": name}})
            return Exchange(user_turn=user_turn, reply=reply, error=error, stale=True)

        self.speak(reply.text)
        return Exchange(user_turn=user_turn, reply=reply, error=error)

    def _dispatch(
        self,
        adapter: ProviderAdapter,
        name: str,
        snapshot: Tuple[Turn, ...],
        user_text: str,
    ) -> Tuple[Turn, Optional[ProviderError]]:
        try:
            self._credentials.require(name)
            text = adapter.respond(snapshot, user_text, is_first_turn=is_first_turn(snapshot))
        except ProviderError as e:
            logger.error(
                f"Error fetching AI response: {e.message}",
                extra={"extra": {"provider": name, "kind": e.kind, "code": e.code}},
            )
            return Turn(role="agent", text=f"Error: {e.message}", provider=name), e
        except Exception as e:
            logger.exception(f"Unexpected error fetching AI response: {e}", extra={"extra": {"provider": name}})
            error = TransportError(message=str(e) or FALLBACK_ERROR_MESSAGE, provider=name)
            return Turn(role="agent", text=f"Error: {error.message}", provider=name), error
        return Turn(role="agent", text=text, provider=name), None
