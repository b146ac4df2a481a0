from .ranked import METRIC_MAX, RankedItem, by_metric_desc, rank_records
from .sort import quicksort
from .topk import (
    COUNT_MAX,
    STRATEGIES,
    BoundedTopK,
    CollectThenTruncate,
    TopKStrategy,
    extract_top_k,
    get_strategy,
    validate_count,
)
