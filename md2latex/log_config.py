import logging
import logging.handlers
from pathlib import Path

from md2latex.config import settings


def setup_logging(level: str | None = None) -> None:
    """Configure root logger with console + optional rotating file handlers.

    Guarded against duplicate handlers when called more than once.
    """
    root = logging.getLogger()

    if getattr(root, "_md2latex_configured", False):
        return
    root._md2latex_configured = True  # type: ignore[attr-defined]

    level_name = (level or settings.LOG_LEVEL).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)-7s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root.setLevel(log_level)

    console = logging.StreamHandler()
    console.setLevel(log_level)
    console.setFormatter(fmt)
    root.addHandler(console)

    # Rotate at 5 MB, keep 3 backups
    if settings.LOG_FILE:
        log_path = Path(settings.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_h = logging.handlers.RotatingFileHandler(
            log_path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8",
        )
        file_h.setLevel(log_level)
        file_h.setFormatter(fmt)
        root.addHandler(file_h)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
