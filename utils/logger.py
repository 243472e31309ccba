import sys
from pathlib import Path

from loguru import logger as _logger

from utils.config_loader import BASE_DIR, config

_log_cfg = config["logging"]


def configure_logging(level: str | None = None) -> None:
    """(Re)install the stderr sink and, if configured, the rotating file sink."""
    level = level or _log_cfg.get("level", "INFO")
    fmt = _log_cfg.get("format", "{time} | {level} | {message}")

    _logger.remove()

    _logger.add(sys.stderr, level=level, format=fmt)

    if _log_cfg.get("path"):
        log_path = Path(_log_cfg["path"])
        if not log_path.is_absolute():
            log_path = BASE_DIR / log_path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _logger.add(
            str(log_path),
            level=level,
            format=fmt,
            rotation=_log_cfg.get("rotation", "10 MB"),
            retention=_log_cfg.get("retention", "30 days"),
            encoding="utf-8",
        )


configure_logging()

logger = _logger
