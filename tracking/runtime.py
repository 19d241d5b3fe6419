"""Runtime helpers for tracking how often scraper functions execute.

A full scrape calls ``t`` many thousands of times across concurrent venue
tasks, so counts are written to disk every ``TRACKING_FLUSH_EVERY`` calls and
once more at interpreter exit rather than on every call.
"""

from __future__ import annotations

import atexit
import json
import os
import threading
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Dict, Optional

_LOCK = threading.RLock()
_DEFAULT_FILE = Path(__file__).resolve().parents[1] / "logs" / "function_call_counts.json"
_TRACKING_FILE = Path(os.getenv("TRACKING_FILE") or _DEFAULT_FILE)
_ENABLED = os.getenv("TRACKING_ENABLED", "true").strip().lower() in {"1", "true", "yes", "on"}


def _flush_interval(raw: Optional[str], default: int = 500) -> int:
    try:
        return max(1, int(raw)) if raw else default
    except (TypeError, ValueError):
        return default


_FLUSH_EVERY = _flush_interval(os.getenv("TRACKING_FLUSH_EVERY"))

_COUNTS: Dict[str, int] = {}
_pending = 0


def _load_counts(path: Path) -> Dict[str, int]:
    if not path.exists():
        return {}

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, ValueError, TypeError):
        return {}

    if not isinstance(data, dict):
        return {}

    loaded: Dict[str, int] = {}
    for name, raw_count in data.items():
        if not name:
            continue
        try:
            loaded[str(name)] = max(int(raw_count), 0)
        except (TypeError, ValueError):
            continue
    return loaded


def _write_counts_locked(path: Path) -> None:
    """Atomically replace ``path`` with the current counts. Caller holds ``_LOCK``."""
    tmp_path: Optional[Path] = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile("w", encoding="utf-8", dir=path.parent, delete=False) as handle:
            json.dump(_COUNTS, handle, sort_keys=True, indent=1)
            handle.write("\n")
            tmp_path = Path(handle.name)
        tmp_path.replace(path)
    except OSError:
        if tmp_path is not None:
            try:
                tmp_path.unlink()
            except OSError:
                pass


def t(func_name: str) -> None:
    """Record the provided function name each time it runs."""
    global _pending
    if not func_name or not _ENABLED:
        return

    with _LOCK:
        _COUNTS[func_name] = _COUNTS.get(func_name, 0) + 1
        _pending += 1
        if _pending >= _FLUSH_EVERY:
            _write_counts_locked(_TRACKING_FILE)
            _pending = 0


def flush() -> None:
    """Write any unsaved counts to the tracking file."""
    global _pending
    with _LOCK:
        if _pending:
            _write_counts_locked(_TRACKING_FILE)
            _pending = 0


def counts() -> Dict[str, int]:
    """Return a copy of the accumulated call counts."""
    with _LOCK:
        return dict(_COUNTS)


def reset() -> None:
    """Forget in-memory counts; the tracking file is left untouched."""
    global _pending
    with _LOCK:
        _COUNTS.clear()
        _pending = 0


if _ENABLED:
    _COUNTS.update(_load_counts(_TRACKING_FILE))
    atexit.register(flush)
