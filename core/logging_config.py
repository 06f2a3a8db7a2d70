from pathlib import Path
import logging
import sys
from typing import Optional
from datetime import datetime

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(
    logs_dir: Optional[str | Path] = None,
    log_file_name: str = "server.log",
    level: int | str = logging.INFO,
) -> logging.Logger:
    """Configure root logging to stderr and a timestamped file under `logs_dir`.

    Stdout carries the MCP stdio protocol, so nothing is ever logged there.
    Idempotent: calling multiple times won't add duplicate handlers.
    """
    if logs_dir is None:
        logs_dir = Path(__file__).resolve().parent.parent / "logs"
    else:
        logs_dir = Path(logs_dir)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    # one file handler per process, whatever its timestamp
    has_file_handler = any(
        isinstance(h, logging.FileHandler) and Path(h.baseFilename).resolve().parent == logs_dir.resolve()
        for h in root_logger.handlers
    )
    if not has_file_handler:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base = Path(log_file_name).stem
        ext = Path(log_file_name).suffix or ".log"
        log_file = logs_dir / f"{base}_{timestamp}{ext}"
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_file, encoding="utf-8")
            fh.setFormatter(formatter)
            fh.setLevel(level)
            root_logger.addHandler(fh)
        except OSError:
            # read-only checkout: stderr only
            pass

    has_stderr_handler = any(
        type(h) is logging.StreamHandler and getattr(h, "stream", None) is sys.stderr
        for h in root_logger.handlers
    )
    if not has_stderr_handler:
        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(formatter)
        sh.setLevel(level)
        root_logger.addHandler(sh)

    # the HTTP stack logs every request line at INFO, including signed URLs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return logging.getLogger(__name__)
