import datetime
import json
import os
import threading
import uuid

from Sysquery.config import config

_local = threading.local()


def set_run_id(run_id=None):
    _local.run_id = str(run_id or uuid.uuid4())
    return _local.run_id


def get_run_id():
    value = getattr(_local, "run_id", "")
    return str(value or "")


def _enabled():
    return str(getattr(config, "runtime_log_enabled", "1")).lower() in ("1", "true", "yes", "on")


def _path():
    # abspath needs the cwd when the configured path is relative; callers guard OSError.
    return os.path.abspath(str(getattr(config, "runtime_log_path", "") or "runtime_events.jsonl"))


def log_event(event, **fields):
    """Append one JSON line; a log that cannot be written never fails the caller."""
    if not _enabled():
        return False
    row = {
        "ts": datetime.datetime.now().isoformat(timespec="seconds"),
        "event": str(event or ""),
        "run_id": get_run_id(),
    }
    row.update(fields or {})
    try:
        path = _path()
        folder = os.path.dirname(path)
        if folder and not os.path.isdir(folder):
            os.makedirs(folder, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(row, ensure_ascii=False, default=str) + "\n")
    except OSError:
        return False
    return True


def recent_events(limit=20, run_id=None):
    """Last `limit` events, optionally only those logged under `run_id`."""
    try:
        path = _path()
    except OSError:
        return []
    if not os.path.exists(path):
        return []
    rows = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                obj = json.loads(line)
            except ValueError:
                continue
            if not isinstance(obj, dict):
                continue
            if run_id and obj.get("run_id") != run_id:
                continue
            rows.append(obj)
    return rows[-max(1, int(limit)) :]
