"""JSON-lines 文件日志。

每条记录一行 JSON：ts / level / name / msg，再合并 extra={"extra": {...}} 中的字段。
Gemini 的 API Key 走 URL query 参数，OpenAI 走 Bearer 头，
异常信息里可能带出这两类凭据，写盘前统一打码。
"""

import json
import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from support_agent.config.settings import settings

LOG_FILE_NAME = "support_agent.log"

_SECRET_PATTERNS = [
    (re.compile(r"([?&]key=)[^&\s'\"]+"), r"\1***"),
    (re.compile(r"(Bearer\s+)[^\s'\"]+", re.IGNORECASE), r"\1***"),
]


def mask_secrets(text: str) -> str:
    for pattern, repl in _SECRET_PATTERNS:
        text = pattern.sub(repl, text)
    return text


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        msg = mask_secrets(record.getMessage() or "")
        if settings.log_redact_content:
            msg = msg[:64]
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update({k: mask_secrets(v) if isinstance(v, str) else v for k, v in extra.items()})
        if record.exc_info:
            payload["exc"] = mask_secrets(self.formatException(record.exc_info))
        return json.dumps(payload, ensure_ascii=False)


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("support_agent")
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return logger
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_dir / LOG_FILE_NAME, encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(JsonFormatter())
    logger.addHandler(fh)
    return logger


logger = setup_logger()
