"""提示词加载工具。

按语言(locale) 从 prompts/<locale> 目录读取文本：
- tech_support_system.md: 技术支持人设指令（persona directive）。
- welcome.md: 会话开始/重置时助手的欢迎语。
"""

from pathlib import Path


PROMPTS_DIR = Path(__file__).resolve().parent


def _read(name: str, locale: str) -> str:
    return (PROMPTS_DIR / locale / name).read_text(encoding="utf-8").strip()


def load_persona_directive(locale: str = "en") -> str:
    """加载技术支持人设指令。"""

    return _read("tech_support_system.md", locale)


def load_welcome_message(locale: str = "en") -> str:
    return _read("welcome.md", locale)


PERSONA_DIRECTIVE = load_persona_directive()
WELCOME_MESSAGE = load_welcome_message()
