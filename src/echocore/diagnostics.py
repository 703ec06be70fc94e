"""Opt-in tracing of calls into the filter, graph and buffer helpers."""
from __future__ import annotations

import threading
from pathlib import Path

__all__ = [
    "enable_call_logging",
    "call_logging_enabled",
    "log_call",
    "log_path",
    "set_log_path",
]


_LOG_CALLS: bool | None = None
_LOG_PATH: Path | None = None
_LOG_LOCK = threading.Lock()


def _load_defaults() -> None:
    global _LOG_CALLS, _LOG_PATH
    from .config import get_runtime_config

    runtime = get_runtime_config()
    if _LOG_CALLS is None:
        _LOG_CALLS = runtime.diagnostics
    if _LOG_PATH is None:
        _LOG_PATH = runtime.log_path


def enable_call_logging(enabled: bool) -> None:
    """Enable or disable call tracing for this process."""

    global _LOG_CALLS
    _LOG_CALLS = bool(enabled)


def call_logging_enabled() -> bool:
    """Return ``True`` when call tracing is enabled."""

    if _LOG_CALLS is None:
        _load_defaults()
    return bool(_LOG_CALLS)


def log_path() -> Path:
    if _LOG_PATH is None:
        _load_defaults()
    return _LOG_PATH


def set_log_path(path: str | Path) -> None:
    global _LOG_PATH
    _LOG_PATH = Path(path)


def log_call(message: str) -> None:
    """Append ``message`` to the trace log when tracing is enabled."""

    if not call_logging_enabled():
        return
    target = log_path()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        return
    try:
        with _LOG_LOCK:
            with target.open("a", encoding="utf-8") as handle:
                handle.write(f"{message}\n")
    except OSError:
        return
