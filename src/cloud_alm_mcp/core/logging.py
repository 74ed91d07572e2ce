import logging
import sys
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

LOG_EXTRA_FIELDS = (
    "tool",
    "method",
    "url",
    "endpoint",
    "status",
    "duration_ms",
    "error_type",
    "kind",
    "mode",
    "expires_at",
)

TRACE_FILE_PREFIX = "sap_calm_mcp_trace_"


class LogfmtFormatter(logging.Formatter):
    """Small logfmt-style formatter that tolerates missing extras."""

    def format(self, record: logging.LogRecord) -> str:  # pragma: no cover - trivial
        kv: list[str] = [
            f"ts={self.formatTime(record, '%Y-%m-%dT%H:%M:%S')}",
            f"level={record.levelname.lower()}",
            f"logger={record.name}",
        ]

        msg = record.getMessage()
        if msg:
            kv.append(f"event={self._fmt_val(msg)}")

        for key in LOG_EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is None:
                continue
            kv.append(f"{key}={self._fmt_val(val)}")

        if record.exc_info:
            kv.append(f"exc_type={record.exc_info[0].__name__}")

        return " ".join(kv)

    @staticmethod
    def _fmt_val(val: Any) -> str:
        if isinstance(val, (int, float, bool)):
            return str(val)
        s = str(val)
        if " " in s or "=" in s:
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def default_trace_path() -> Path:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return Path(tempfile.gettempdir()) / f"{TRACE_FILE_PREFIX}{stamp}.log"


def setup_logging(
    level: str = "INFO", *, trace_file: Optional[Path] = None
) -> Optional[Path]:
    """
    Initialize root logging with logfmt output on stderr.

    stdout carries the MCP stdio protocol, so nothing may log there. When
    ``trace_file`` is given, records are mirrored to that file as well; the
    path is returned so the caller can announce it.
    """

    root = logging.getLogger()
    # Avoid duplicate handlers if called twice
    for h in list(root.handlers):
        root.removeHandler(h)

    formatter = LogfmtFormatter()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root.addHandler(handler)

    if trace_file is not None:
        file_handler = logging.FileHandler(trace_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # httpx logs every request at INFO; keep it quiet unless debugging
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if level.upper() == "DEBUG" else logging.WARNING
    )
    return trace_file


__all__ = [
    "setup_logging",
    "default_trace_path",
    "LogfmtFormatter",
    "LOG_EXTRA_FIELDS",
]
