"""
Process-local counters and latency series.

Counter names are dotted: `command.<name>.ok|error`, `source.<kind>.skipped`
and `topk.<strategy>.runs|seen|kept`. Each latency key keeps its last 200
observations. `metrics_snapshot` folds the `topk.*` keys into a per-strategy
table.
"""
import json
import os
import time

from Sysquery.config import config

from .structured_log import log_event

_COUNTERS = {}
_LAT_MS = {}
_LAT_KEEP = 200


def metrics_inc(name, value=1):
    key = str(name or "")
    if not key:
        return
    _COUNTERS[key] = int(_COUNTERS.get(key, 0)) + int(value)


def metrics_observe_ms(name, value_ms):
    key = str(name or "")
    if not key:
        return
    arr = _LAT_MS.get(key) or []
    arr.append(float(value_ms))
    _LAT_MS[key] = arr[-_LAT_KEEP:]


def record_extraction(strategy, seen, kept, elapsed_ms):
    """Account one top-k extraction: items consumed, items returned, wall time."""
    prefix = f"topk.{strategy}"
    metrics_inc(f"{prefix}.runs")
    metrics_inc(f"{prefix}.seen", seen)
    metrics_inc(f"{prefix}.kept", kept)
    metrics_observe_ms(prefix, elapsed_ms)


def _latency(vals):
    ordered = sorted(vals)
    return {
        "count": len(ordered),
        "avg": sum(ordered) / float(len(ordered)),
        "p95": ordered[max(0, int(len(ordered) * 0.95) - 1)],
        "max": ordered[-1],
    }


def topk_summary():
    table = {}
    for key, value in _COUNTERS.items():
        parts = key.split(".")
        if len(parts) != 3 or parts[0] != "topk":
            continue
        table.setdefault(parts[1], {"runs": 0, "seen": 0, "kept": 0})[parts[2]] = value
    for strategy, row in table.items():
        vals = _LAT_MS.get(f"topk.{strategy}") or []
        row["avg_ms"] = sum(vals) / float(len(vals)) if vals else 0.0
        row["avg_seen"] = row["seen"] / float(row["runs"]) if row["runs"] else 0.0
    return table


def metrics_snapshot(persist=True):
    out = {
        "counters": dict(_COUNTERS),
        "latency_ms": {k: _latency(vals) for k, vals in _LAT_MS.items() if vals},
        "topk": topk_summary(),
        "ts_epoch": int(time.time()),
    }
    target = getattr(config, "runtime_metrics_path", "")
    if not persist or not target:
        return out
    try:
        path = os.path.abspath(str(target))
        folder = os.path.dirname(path)
        if folder and not os.path.isdir(folder):
            os.makedirs(folder, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(out, f, ensure_ascii=False, indent=2)
    except OSError as e:
        log_event("metrics_persist_failed", path=str(target), reason=str(e))
    return out
