import os
import stat
from dataclasses import dataclass

from Sysquery.config import config
from Sysquery.ranking import RankedItem, get_strategy, rank_records, validate_count
from Sysquery.runtime import log_event, metrics_inc
from Sysquery.runtime.errors import MetricUnavailableError, SourceUnavailableError

from .system_stats import convert_size, to_megabytes


@dataclass(frozen=True)
class FileInfo:
    path: str


def _runtime_files():
    """Absolute paths of this tool's own log and metrics files."""
    paths = set()
    for attr in ("runtime_log_path", "runtime_metrics_path"):
        value = getattr(config, attr, "")
        if value:
            paths.add(os.path.abspath(str(value)))
    return paths


def iter_file_paths(start_dir):
    """
    Yield every path under `start_dir` (symlinks are not followed).

    A start directory that cannot be listed raises SourceUnavailableError;
    unreadable subdirectories are skipped. The runtime log and metrics
    snapshot files are never yielded.
    """
    try:
        root = os.path.abspath(str(start_dir))
        own_files = _runtime_files()
    except OSError as e:
        log_event("source_unavailable", source="files", path=str(start_dir), reason=str(e))
        raise SourceUnavailableError("directory_unreachable", str(start_dir)) from e
    if not os.path.isdir(root):
        log_event("source_unavailable", source="files", path=root)
        raise SourceUnavailableError("directory_unreachable", root)

    def _on_error(err):
        if os.path.abspath(str(getattr(err, "filename", "") or "")) == root:
            log_event("source_unavailable", source="files", path=root, reason=str(err))
            raise SourceUnavailableError("directory_unreachable", root) from err
        metrics_inc("source.files.skipped")
        log_event("item_skipped", source="files", path=getattr(err, "filename", ""), reason=str(err))

    for dirpath, _, filenames in os.walk(root, onerror=_on_error, followlinks=False):
        for filename in filenames:
            path = os.path.join(dirpath, filename)
            if path in own_files:
                continue
            yield path


def measure_file(path):
    st = os.lstat(path)
    if not stat.S_ISREG(st.st_mode):
        raise MetricUnavailableError(f"not a regular file: {path}")
    return RankedItem(payload=FileInfo(path=path), metric=int(st.st_size))


def _skipped(path, exc):
    metrics_inc("source.files.skipped")
    log_event("item_skipped", source="files", path=path, reason=str(exc))


def find_largest_files(start_dir, n, strategy=None):
    """
    The `n` largest regular files under `start_dir`, largest first.

    Directory trees can hold millions of entries, so the default strategy
    keeps at most `n` items in memory while walking.
    """
    n = validate_count(n)
    strategy = get_strategy(strategy or getattr(config, "files_topk_strategy", "bounded"))
    return strategy.extract(rank_records(iter_file_paths(start_dir), measure_file, on_skip=_skipped), n)


def format_files(items):
    lines = []
    for item in items:
        lines.append(
            f"The file located at {item.payload.path} is {to_megabytes(item.metric)} megabytes "
            f"({convert_size(item.metric)})"
        )
        lines.append("")
    return lines
