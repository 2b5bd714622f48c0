import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

HISTORY_PATH = Path.home() / ".qr_base45_history.jsonl"


def log_event(action: str, payload: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Append a simple JSON line to history for traceability.
    """
    record = {"action": action, "ts": round(time.time(), 3), **payload}
    target = path or HISTORY_PATH
    try:
        with target.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(record, ensure_ascii=False) + "\n")
    except OSError:
        # History failures should not break core functionality.
        pass


def read_events(path: Optional[Path] = None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    target = path or HISTORY_PATH
    if not target.exists():
        return []
    events: List[Dict[str, Any]] = []
    for line in target.read_text(encoding="utf-8").splitlines():
        if not line.strip():
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError:
            continue
        if isinstance(record, dict):
            events.append(record)
    if limit is not None:
        events = events[-limit:] if limit > 0 else []
    return events


def clear_history(path: Optional[Path] = None) -> None:
    target = path or HISTORY_PATH
    if target.exists():
        target.unlink()
