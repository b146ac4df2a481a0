from dataclasses import dataclass

import psutil

from Sysquery.config import config
from Sysquery.ranking import RankedItem, get_strategy, rank_records, validate_count
from Sysquery.runtime import log_event, metrics_inc
from Sysquery.runtime.errors import MetricUnavailableError, SourceUnavailableError

from .system_stats import to_gigabytes


@dataclass(frozen=True)
class ProcessInfo:
    pid: int
    name: str
    read_bytes: int
    written_bytes: int
    status: str


def _io_bytes(proc):
    # io_counters is missing on macOS and often denied for other users' processes
    io_counters = getattr(proc, "io_counters", None)
    if io_counters is None:
        return 0, 0
    try:
        io = io_counters()
    except (psutil.Error, OSError):
        return 0, 0
    return int(getattr(io, "read_bytes", 0)), int(getattr(io, "write_bytes", 0))


def measure_process(proc):
    """Resident memory is the metric; a process that cannot report it is skipped."""
    info = getattr(proc, "info", None) or {}
    try:
        mem = info.get("memory_info") or proc.memory_info()
        name = info.get("name") or proc.name()
        status = info.get("status") or proc.status()
    except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess) as e:
        raise MetricUnavailableError(str(e)) from e
    if mem is None:
        raise MetricUnavailableError(f"no memory info for pid {proc.pid}")
    read_bytes, written_bytes = _io_bytes(proc)
    payload = ProcessInfo(
        pid=int(proc.pid),
        name=str(name or ""),
        read_bytes=read_bytes,
        written_bytes=written_bytes,
        status=str(status or ""),
    )
    return RankedItem(payload=payload, metric=int(mem.rss))


def _skipped(proc, exc):
    metrics_inc("source.processes.skipped")
    log_event("item_skipped", source="processes", pid=getattr(proc, "pid", None), reason=str(exc))


def list_processes():
    try:
        return list(psutil.process_iter(attrs=["name", "memory_info", "status"]))
    except (psutil.Error, OSError) as e:
        log_event("source_unavailable", source="processes", reason=str(e))
        raise SourceUnavailableError("process_enumeration_failed", str(e)) from e


def top_processes(n, strategy=None):
    """
    Processes using the most resident memory, largest first.

    The process table is bounded by the host, so the default strategy keeps
    every process, sorts, and truncates to `n`.
    """
    n = validate_count(n)
    strategy = get_strategy(strategy or getattr(config, "process_topk_strategy", "collect"))
    procs = list_processes()
    return strategy.extract(rank_records(procs, measure_process, on_skip=_skipped), n)


def format_processes(items):
    lines = ["", "Current processes: ", ""]
    for item in items:
        p = item.payload
        lines.append(f"[{p.name}]: memory usage: {to_gigabytes(item.metric)} gigabytes")
        lines.append(
            f"[{p.name}]: disk usage: total disk reads: {to_gigabytes(p.read_bytes)} gigabytes; "
            f"total disk writes: {to_gigabytes(p.written_bytes)} gigabytes;"
        )
        lines.append(f"[{p.name}]: status: {p.status} ")
        lines.append("")
    return lines
