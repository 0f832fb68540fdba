from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

LOGGER_NAME = "things_left_behind"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(slots=True)
class AppLoggerBundle:
    app: logging.Logger
    latest_log_path: Path | None


def _rotate_latest_log(logs_dir: Path, keep_archives: int = 5) -> Path:
    logs_dir.mkdir(parents=True, exist_ok=True)
    latest = logs_dir / "latest.log"
    if latest.exists():
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        archived = logs_dir / f"latest_{stamp}.log"
        latest.replace(archived)

    archives = sorted(
        [path for path in logs_dir.glob("latest_*.log") if path.is_file()],
        key=lambda p: p.stat().st_mtime,
        reverse=True,
    )
    for stale in archives[keep_archives:]:
        stale.unlink(missing_ok=True)
    return latest


def configure_logging(logs_dir: Path | None = None, level: int = logging.INFO) -> AppLoggerBundle:
    formatter = logging.Formatter(LOG_FORMAT)

    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(level)
    for handler in list(app_logger.handlers):
        handler.close()
    app_logger.handlers.clear()
    app_logger.propagate = False

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    app_logger.addHandler(stream_handler)

    latest: Path | None = None
    if logs_dir is not None:
        latest = _rotate_latest_log(logs_dir)
        file_handler = logging.FileHandler(latest, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        app_logger.addHandler(file_handler)

    return AppLoggerBundle(app=app_logger, latest_log_path=latest)
