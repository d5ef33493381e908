"""JSON-lines 日志。

每条记录一行 JSON：ts / level / name / msg，再合并调用方通过
extra={"extra": {...}} 传入的结构化字段；带异常时附加 exc_type / exc。
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from kindroid_core.config.settings import LoggingSettings, load_logging_settings

LOGGER_NAME = "kindroid_core"
LOG_FILE_NAME = "kindroid.log"
REDACTED_MSG_LENGTH = 64


class JsonFormatter(logging.Formatter):
    def __init__(self, redact: bool = False):
        super().__init__()
        self.redact = redact

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(self._payload(record), ensure_ascii=False, default=str)

    def _payload(self, record: logging.LogRecord) -> Dict[str, Any]:
        msg = record.getMessage() or ""
        if self.redact:
            msg = msg[:REDACTED_MSG_LENGTH]
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload["exc_type"] = type(exc).__name__
            payload["exc"] = str(exc)
        return payload


def _has_json_handler(logger: logging.Logger) -> bool:
    return any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers)


def setup_logger(cfg: Optional[LoggingSettings] = None) -> logging.Logger:
    """给 kindroid_core logger 挂上 JSON 文件 handler，重复调用不会重复挂载。"""

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    if _has_json_handler(logger):
        return logger
    cfg = cfg if cfg is not None else load_logging_settings()
    log_dir = Path(cfg.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_dir / LOG_FILE_NAME, encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(JsonFormatter(redact=cfg.log_redact_content))
    logger.addHandler(fh)
    return logger


logger = setup_logger()
