"""Composable helpers over lazily-produced sequences."""

from .core import (
    values,
    push,
    concat,
    concat_iter,
    reverse,
    shuffle,
    filter,
    map,
    for_each,
    reduce,
)
from .collection import LazyCollection
from .models import CollectionOptions, PageRequest
from .utils import setup_logging, measure_performance, get_performance_summary, clear_performance_metrics

__version__ = "0.1.0"

__all__ = [
    "values",
    "push",
    "concat",
    "concat_iter",
    "reverse",
    "shuffle",
    "filter",
    "map",
    "for_each",
    "reduce",
    "LazyCollection",
    "CollectionOptions",
    "PageRequest",
    "setup_logging",
    "measure_performance",
    "get_performance_summary",
    "clear_performance_metrics",
]
