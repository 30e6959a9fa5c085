"""语音朗读输出。

speak(text) 为 fire-and-forget：启动系统自带的 TTS 命令后立即返回，
文本通过 stdin 传入，避免命令行转义问题。新的朗读会打断上一段。

- macOS: say
- Linux: espeak / espeak-ng
- Windows: PowerShell + System.Speech
找不到可用命令时退化为 NullSpeaker。
"""

import shutil
import subprocess
import sys
import threading
from typing import List, Optional, Protocol, Sequence

from support_agent.infrastructure.logging.logger import logger


_POWERSHELL_SCRIPT = (
    "Add-Type -AssemblyName System.Speech; "
    "(New-Object System.Speech.Synthesis.SpeechSynthesizer).Speak([Console]::In.ReadToEnd())"
)


class SpeechOutput(Protocol):
    def speak(self, text: str) -> None:
        ...

    def cancel(self) -> None:
        ...


class NullSpeaker:
    """不发声；用于测试或没有 TTS 的环境。"""

    def speak(self, text: str) -> None:
        logger.info("speech output unavailable, skipped", extra={"extra": {"chars": len(text)}})

    def cancel(self) -> None:
        return None


class CommandSpeaker:
    """通过外部 TTS 命令朗读。"""

    def __init__(self, command: Sequence[str]):
        self._command: List[str] = list(command)
        self._proc: Optional[subprocess.Popen] = None
        self._lock = threading.Lock()

    def speak(self, text: str) -> None:
        if not text.strip():
            return
        with self._lock:
            self._stop_locked()
            try:
                self._proc = subprocess.Popen(
                    self._command,
                    stdin=subprocess.PIPE,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                )
                self._proc.stdin.write(text.encode("utf-8"))
                self._proc.stdin.close()
            except OSError as e:
                # 包括 TTS 进程提前退出导致的 BrokenPipeError
                logger.warning(f"speech command failed: {e}", extra={"extra": {"command": self._command[0]}})
                self._stop_locked()

    def cancel(self) -> None:
        with self._lock:
            self._stop_locked()

    def _stop_locked(self) -> None:
        if self._proc is not None and self._proc.poll() is None:
            self._proc.terminate()
        self._proc = None


def default_speaker() -> SpeechOutput:
    """按平台选择可用的 TTS 命令。"""

    if sys.platform == "darwin" and shutil.which("say"):
        return CommandSpeaker(["say"])
    if sys.platform.startswith("win"):
        exe = shutil.which("powershell") or shutil.which("pwsh")
        if exe:
            return CommandSpeaker([exe, "-NoProfile", "-Command", _POWERSHELL_SCRIPT])
    for name in ("espeak-ng", "espeak"):
        exe = shutil.which(name)
        if exe:
            return CommandSpeaker([exe, "--stdin"])
    return NullSpeaker()
