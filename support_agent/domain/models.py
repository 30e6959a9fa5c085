"""统一的对话数据模型。

本模块定义了会话层与各 Provider 适配器之间共享的标准数据结构：

- Turn: 一条对话消息，归属 user 或 agent，追加后不可变。
- Conversation: 按时间顺序排列的 Turn 序列，由调用方持有，适配器只读。
- Exchange: 会话层一次发送的显式结果（回复、错误、是否已过期）。

各 Provider 适配器只依赖这些模型，并负责在厂商 JSON 与本结构之间做转换。
"""

from dataclasses import dataclass
from typing import Literal, Optional, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from support_agent.domain.exceptions import ProviderError


# 对话参与方：用户 / 助手
Speaker = Literal["user", "agent"]


@dataclass(frozen=True)
class Turn:
    """一条对话消息。

    - role: 发言方。
    - text: 纯文本内容。
    - provider: 产生该回复的 Provider 名（仅 agent 消息有值，用于 UI 展示）。
    """

    role: Speaker
    text: str
    provider: Optional[str] = None


# 调用方持有的会话快照，插入顺序即时间顺序
Conversation = Sequence[Turn]


@dataclass(frozen=True)
class Exchange:
    """ChatSession.send 的返回结果。"""

    user_turn: Turn
    reply: Turn
    error: Optional["ProviderError"] = None
    # 回复到达前会话已被重置，回复未写入会话
    stale: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and not self.stale
