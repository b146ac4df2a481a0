from .structured_log import set_run_id, get_run_id, log_event, recent_events
from .metrics import metrics_inc, metrics_observe_ms, metrics_snapshot, record_extraction, topk_summary
from .errors import humanize, MetricUnavailableError, SourceUnavailableError, TopKInvariantError
