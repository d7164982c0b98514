from .temporal_distances import (
    InvalidArgument,
    InvalidArgumentError,
    Matcher,
    lcss_distance,
    lcss_similarity,
    lcss_table,
    match,
)
from .pair_selector import DEFAULT_CONFIG, PairSelector
from .utils import pair_to_rank_map

__all__ = [
    "InvalidArgument",
    "InvalidArgumentError",
    "Matcher",
    "lcss_distance",
    "lcss_similarity",
    "lcss_table",
    "match",
    "DEFAULT_CONFIG",
    "PairSelector",
    "pair_to_rank_map",
]
