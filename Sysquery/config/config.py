import os
from pathlib import Path

try:
    from dotenv import load_dotenv  # type: ignore
except Exception:
    load_dotenv = None

if load_dotenv is not None:
    # Load project-level .env automatically so runtime behavior matches configured values.
    _repo_root = Path(__file__).resolve().parents[2]
    load_dotenv(_repo_root / ".env", override=False)


# Default result counts (both must fit the 0-255 range).
default_num_files = int(os.getenv("SYSQUERY_DEFAULT_NUM_FILES", "5"))
default_num_processes = int(os.getenv("SYSQUERY_DEFAULT_NUM_PROCESSES", "10"))


# Top-K strategies:
# - bounded: heap capped at K while scanning (directory trees can be huge)
# - collect: keep everything, sort, truncate (process list is host-bounded)
files_topk_strategy = os.getenv("SYSQUERY_FILES_TOPK_STRATEGY", "bounded")
process_topk_strategy = os.getenv("SYSQUERY_PROCESS_TOPK_STRATEGY", "collect")


# psutil sampling window for per-CPU usage.
cpu_sample_interval_s = float(os.getenv("SYSQUERY_CPU_SAMPLE_INTERVAL_S", "0.1"))


# Runtime / ops
# Runtime files live under the user's home, never under the scanned tree.
runtime_data_dir = os.getenv("SYSQUERY_RUNTIME_DATA_DIR") or str(Path.home() / ".sysquery")
runtime_log_enabled = os.getenv("SYSQUERY_RUNTIME_LOG_ENABLED", "1")
runtime_log_path = os.getenv("SYSQUERY_RUNTIME_LOG_PATH") or os.path.join(runtime_data_dir, "runtime_events.jsonl")
runtime_metrics_path = os.getenv("SYSQUERY_RUNTIME_METRICS_PATH") or os.path.join(
    runtime_data_dir, "metrics_snapshot.json"
)
