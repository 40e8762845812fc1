"""Debug tracing of chunk I/O."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
import threading


class DebugLogger:
    """Appends one JSON record per chunk read to a trace file (singleton pattern)."""

    TRACE_FILENAME = "io_trace.jsonl"

    _enabled: bool = False
    _log_dir: Optional[Path] = None
    _lock = threading.Lock()

    @classmethod
    def configure(cls, enabled: bool = False, log_dir: Optional[Path] = None) -> None:
        """Configure the debug logger.

        Args:
            enabled: Whether I/O tracing is enabled
            log_dir: Directory for the trace file (default: ~/.lineseek/logs)
        """
        with cls._lock:
            cls._enabled = enabled
            cls._log_dir = log_dir or Path.home() / ".lineseek" / "logs"

            if cls._enabled and cls._log_dir:
                cls._log_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def is_enabled(cls) -> bool:
        """Check if I/O tracing is enabled."""
        return cls._enabled

    @classmethod
    def trace_path(cls) -> Optional[Path]:
        """Path of the trace file, or None if no directory is configured."""
        if cls._log_dir is None:
            return None
        return cls._log_dir / cls.TRACE_FILENAME

    @classmethod
    def log_io(cls, operation: str, payload: Dict[str, Any]) -> None:
        """Record a chunk I/O event.

        Args:
            operation: Name of the operation (e.g., "load_chunk", "restore_chunk")
            payload: Event details such as chunk index, offset and length
        """
        if not cls._enabled or not cls._log_dir:
            return

        record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "operation": operation,
            "payload": payload,
        }
        line = json.dumps(record, default=cls._json_serializer)

        with cls._lock:
            try:
                with open(cls._log_dir / cls.TRACE_FILENAME, "a", encoding="utf-8") as f:
                    f.write(line + "\n")
            except OSError:
                # Tracing must never break a read
                pass

    @staticmethod
    def _json_serializer(obj: Any) -> str:
        """Serialize paths, datetimes and other objects as strings."""
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Path):
            return str(obj)
        return str(obj)
